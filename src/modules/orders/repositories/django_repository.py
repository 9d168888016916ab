"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
All write operations run inside ``transaction.atomic()`` so the Order
aggregate (Order + OrderItems) is persisted or removed as one unit.

Foreign keys are created ``DEFERRABLE INITIALLY DEFERRED`` by Django, so
a dangling ``customer_id`` / ``product_id`` would only be reported at
commit time.  ``connection.check_constraints`` forces the check inside
the unit of work; the offending reference is then identified by
looking the ids up, never by parsing the driver's message.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional
from uuid import UUID

import structlog
from django.db import IntegrityError, connection, models, transaction

from modules.core.exceptions import ReferenceViolation
from modules.customers.models import Customer
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository
from modules.products.models import Product

logger = structlog.get_logger(__name__)

_CHECKED_TABLES = [Order._meta.db_table, OrderItem._meta.db_table]


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items atomically.

        ``data`` keys:
        - ``customer_id`` (required)
        - ``status`` (required)
        - ``items`` (required): list of dicts with ``product_id``,
          ``quantity``, ``price``
        """
        items = data["items"]
        try:
            with transaction.atomic():
                order = Order.objects.create(
                    customer_id=data["customer_id"],
                    status=data["status"],
                )
                OrderItem.objects.bulk_create(
                    [
                        OrderItem(
                            order=order,
                            product_id=item["product_id"],
                            quantity=item["quantity"],
                            price=item["price"],
                        )
                        for item in items
                    ]
                )
                connection.check_constraints(table_names=_CHECKED_TABLES)
        except IntegrityError as exc:
            violation = self._find_missing_reference(
                data["customer_id"], (item["product_id"] for item in items)
            )
            if violation is None:
                raise
            raise violation from exc

        logger.info("order.persisted", order_id=str(order.id), item_count=len(items))
        return order

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update(self, id: UUID, data: Dict[str, Any]) -> Optional[Order]:
        """Update order fields under a row-level lock."""
        try:
            with transaction.atomic():
                order = Order.objects.select_for_update().filter(id=id).first()
                if not order:
                    return None
                for field, value in data.items():
                    setattr(order, field, value)
                order.save(update_fields=list(data) or None)
                if "customer_id" in data:
                    connection.check_constraints(table_names=[Order._meta.db_table])
        except IntegrityError as exc:
            violation = self._find_missing_reference(data.get("customer_id"), ())
            if violation is None:
                raise
            raise violation from exc

        logger.info("order.updated", order_id=str(id), fields=sorted(data))
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: UUID) -> Optional[Order]:
        """Retrieve an order with its customer and items attached."""
        return self._with_relations(Order.objects.filter(id=id)).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Order]:
        """List orders, newest first, with eager-loaded relations.

        Supported filter keys include ``status`` and ``customer_id``.
        """
        queryset = self._with_relations(Order.objects.all())
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    # ------------------------------------------------------------------
    # Save / Delete (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist (create or update) an order row."""
        entity.save()
        return entity

    @transaction.atomic
    def delete(self, id: UUID) -> bool:
        """Delete an order's items, then the order, in one transaction.

        Returns ``False`` (and removes nothing) when the order does not
        exist.
        """
        items_deleted, _ = OrderItem.objects.filter(order_id=id).delete()
        orders_deleted, _ = Order.objects.filter(id=id).delete()
        if not orders_deleted:
            transaction.set_rollback(True)
            return False
        logger.info("order.deleted", order_id=str(id), item_count=items_deleted)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _with_relations(queryset: models.QuerySet[Order]) -> models.QuerySet[Order]:
        return queryset.select_related("customer").prefetch_related("items")

    @staticmethod
    def _find_missing_reference(
        customer_id: Optional[UUID], product_ids: Iterable[UUID]
    ) -> Optional[ReferenceViolation]:
        if customer_id is not None and not Customer.objects.filter(id=customer_id).exists():
            return ReferenceViolation("customerId", customer_id)
        wanted = set(product_ids)
        if wanted:
            found = set(Product.objects.filter(id__in=wanted).values_list("id", flat=True))
            missing = wanted - found
            if missing:
                return ReferenceViolation("items.productId", sorted(missing, key=str)[0])
        return None
