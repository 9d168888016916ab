"""Order service layer (Use Cases).

Orchestrates the Order aggregate: an order and its line items are
created together, only the order header (customer / status) is ever
updated, and deletion removes the items and the order in one unit of
work.

Business rules enforced:
- An order is created with at least one item (DTO validation).
- Item prices are stored exactly as supplied (price snapshot).
- Customer and product references must exist (store FK constraints,
  surfaced as ``ReferenceViolation``).
- Status changes are checked against ``VALID_TRANSITIONS``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

import structlog
from django.db import transaction

from modules.orders.exceptions import InvalidOrderStatus, OrderNotFound

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives an ``IOrderRepository`` via constructor injection (DIP).
    """

    def __init__(self, order_repository: IOrderRepository) -> None:
        self._order_repo = order_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create an order and all of its items atomically.

        The customer and products are not pre-checked; the store's
        foreign keys reject dangling references and nothing is persisted.

        Raises:
            ReferenceViolation: the customer or a product does not exist.
        """
        log = logger.bind(customer_id=str(dto.customer_id))
        log.info("order.creation_started", item_count=len(dto.items))

        order = self._order_repo.create(
            {
                "customer_id": dto.customer_id,
                "status": str(dto.status),
                "items": [
                    {
                        "product_id": item.product_id,
                        "quantity": item.quantity,
                        "price": item.price,
                    }
                    for item in dto.items
                ],
            }
        )

        log.info("order.created", order_id=str(order.id), status=order.status)
        return self._order_repo.get_by_id(order.id) or order

    @transaction.atomic
    def update_order(self, order_id: UUID, dto: UpdateOrderDTO) -> Order:
        """Change the customer and/or status of an order.

        Line items are never touched.

        Raises:
            OrderNotFound: the order does not exist.
            InvalidOrderStatus: the status change is not allowed.
            ReferenceViolation: the new customer does not exist.
        """
        changes = dto.changes()
        if "status" in changes:
            changes["status"] = str(changes["status"])

        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound()

        log = logger.bind(order_id=str(order_id))

        new_status = changes.get("status")
        if new_status is not None and not order.can_transition_to(new_status):
            log.warning(
                "order.invalid_transition",
                current_status=order.status,
                new_status=new_status,
            )
            raise InvalidOrderStatus(
                f"Cannot transition from {order.status} to {new_status}."
            )

        if changes:
            if self._order_repo.update(order_id, changes) is None:
                raise OrderNotFound()
            log.info("order.updated", fields=sorted(changes))

        return self._order_repo.get_by_id(order_id)

    def delete_order(self, order_id: UUID) -> None:
        """Delete an order together with its items.

        Raises:
            OrderNotFound: the order does not exist.
        """
        if not self._order_repo.delete(order_id):
            raise OrderNotFound()
        logger.info("order.deleted", order_id=str(order_id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: UUID) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound()
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Order]:
        """Return orders, newest first, with customer and items attached."""
        return self._order_repo.list(filters)
