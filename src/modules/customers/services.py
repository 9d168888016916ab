"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository``.

Business rules enforced here:
- Email and phone are unique; collisions reported by the store are
  mapped to a field-specific error (``DUPLICATE_EMAIL`` /
  ``DUPLICATE_PHONE``).
- A customer with orders cannot be deleted (``CUSTOMER_HAS_ORDERS``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

import structlog
from django.db import transaction
from django.db.models import ProtectedError

from modules.core.exceptions import UniqueViolation
from modules.customers.exceptions import (
    CustomerHasOrders,
    CustomerNotFound,
    DuplicateEmail,
    DuplicatePhone,
)
from modules.customers.models import Customer

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)

_DUPLICATE_ERRORS = {
    "email": DuplicateEmail,
    "phone": DuplicatePhone,
}


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(self, dto: CreateCustomerDTO) -> Customer:
        """Create a new customer.

        Raises:
            DuplicateEmail: the email is already registered.
            DuplicatePhone: the phone is already registered.
        """
        customer = Customer(name=dto.name, email=dto.email, phone=dto.phone)
        customer = self._save(customer)
        logger.info("customer.created", customer_id=str(customer.id))
        return customer

    @transaction.atomic
    def update_customer(self, id: UUID, dto: UpdateCustomerDTO) -> Customer:
        """Apply the supplied subset of name/email/phone to a customer.

        Raises:
            CustomerNotFound: the customer does not exist.
            DuplicateEmail / DuplicatePhone: the new value collides.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound()

        for field, value in dto.changes().items():
            setattr(customer, field, value)

        customer = self._save(customer)
        logger.info("customer.updated", customer_id=str(id))
        return customer

    @transaction.atomic
    def delete_customer(self, id: UUID) -> None:
        """Delete a customer that no order references.

        Raises:
            CustomerHasOrders: one or more orders reference the customer;
                nothing is deleted.
            CustomerNotFound: the customer does not exist.
        """
        log = logger.bind(customer_id=str(id))

        order_count = self._repo.count_orders(id)
        if order_count > 0:
            log.warning("customer.delete_blocked", order_count=order_count)
            raise CustomerHasOrders(order_count)

        try:
            deleted = self._repo.delete(id)
        except ProtectedError:
            # an order was placed after the count above
            order_count = self._repo.count_orders(id)
            log.warning("customer.delete_blocked", order_count=order_count)
            raise CustomerHasOrders(order_count) from None

        if not deleted:
            raise CustomerNotFound()
        log.info("customer.deleted")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> QuerySet[Customer]:
        """Return customers, newest first, optionally filtered."""
        return self._repo.list(filters)

    def get_customer(self, id: UUID) -> Customer:
        """Retrieve a single customer by ID.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound()
        return customer

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _save(self, customer: Customer) -> Customer:
        try:
            return self._repo.save(customer)
        except UniqueViolation as exc:
            logger.warning("customer.duplicate", field=exc.field)
            raise _DUPLICATE_ERRORS[exc.field]() from None
