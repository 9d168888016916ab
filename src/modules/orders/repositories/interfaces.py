"""Order repository interface.

Extends ``IRepository[Order]`` with the methods required by the Order
aggregate: atomic creation with items, header update and atomic
deletion of the order together with its items.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderItem children.  Every mutation
    runs in a single transaction.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items atomically.

        ``data`` must include ``customer_id``, ``status`` and ``items``
        (list of dicts with ``product_id``, ``quantity``, ``price``).

        Raises:
            ReferenceViolation: the customer or a product does not exist.
        """

    @abstractmethod
    def update(self, id: UUID, data: Dict[str, Any]) -> Optional[Order]:
        """Update ``customer_id`` and/or ``status``.

        Returns ``None`` when the order does not exist.

        Raises:
            ReferenceViolation: the new customer does not exist.
        """
