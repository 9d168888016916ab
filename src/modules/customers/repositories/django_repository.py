"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising HTTP-level exceptions; the Service Layer decides
how to translate a missing entity into an API response.

Unique-constraint failures are classified by column here: after the
rejected write is rolled back to its savepoint, the store is queried for
the row holding the conflicting value.  Driver error messages are never
parsed.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from uuid import UUID

import structlog
from django.db import IntegrityError, models, transaction

from modules.core.exceptions import UniqueViolation
from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: UUID) -> Optional[Customer]:
        return Customer.objects.filter(id=id).first()

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet[Customer]:
        """List customers, newest first, with optional Django ORM look-ups.

        Examples of valid filters::

            {"email": "a@x.com"}
            {"name__icontains": "acme"}
        """
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer.

        Raises:
            UniqueViolation: ``email`` or ``phone`` already belongs to
                another customer.
        """
        is_new = entity._state.adding
        try:
            with transaction.atomic():
                entity.save()
        except IntegrityError:
            field = self._colliding_field(entity)
            if field is None:
                raise
            raise UniqueViolation(field) from None
        logger.info("customer.saved", customer_id=str(entity.id), is_new=is_new)
        return entity

    @transaction.atomic
    def delete(self, id: UUID) -> bool:
        """Delete a customer by ID.

        Returns ``False`` if no customer exists with the given ID.
        """
        deleted, _ = Customer.objects.filter(id=id).delete()
        if deleted:
            logger.info("customer.deleted", customer_id=str(id))
        return bool(deleted)

    def count_orders(self, customer_id: UUID) -> int:
        from modules.orders.models import Order

        return Order.objects.filter(customer_id=customer_id).count()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _colliding_field(entity: Customer) -> Optional[str]:
        others = Customer.objects.exclude(pk=entity.pk)
        if others.filter(email=entity.email).exists():
            return "email"
        if entity.phone and others.filter(phone=entity.phone).exists():
            return "phone"
        return None
