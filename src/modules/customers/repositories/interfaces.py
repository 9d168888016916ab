"""Customer repository interface.

Extends ``IRepository[Customer]`` with the order count required by the
customer deletion guard.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate.

    ``save`` raises ``UniqueViolation`` naming the colliding column
    (``email`` or ``phone``) when the store rejects the row.
    """

    @abstractmethod
    def count_orders(self, customer_id: UUID) -> int:
        """Count orders referencing the customer."""
