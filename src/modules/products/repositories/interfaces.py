"""Product repository interface.

Extends ``IRepository[Product]`` with the count required by the
deletion guard.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product  # noqa: F401


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def count_order_items(self, product_id: UUID) -> int:
        """Count order items referencing the product."""
