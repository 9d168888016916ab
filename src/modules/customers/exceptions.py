"""Customer domain exceptions.

Raised by the Service Layer when business rules are violated.
``modules.core.exceptions.exception_handler`` translates them into
HTTP responses carrying the ``code`` below.
"""

from __future__ import annotations

from modules.core.exceptions import DomainError, NotFound


class CustomerNotFound(NotFound):
    """The requested customer does not exist."""

    default_message = "Customer not found"


class DuplicateEmail(DomainError):
    code = "DUPLICATE_EMAIL"
    default_message = "A customer with this email already exists"

    def __init__(self) -> None:
        super().__init__(details={"field": "email"})


class DuplicatePhone(DomainError):
    code = "DUPLICATE_PHONE"
    default_message = "A customer with this phone number already exists"

    def __init__(self) -> None:
        super().__init__(details={"field": "phone"})


class CustomerHasOrders(DomainError):
    """Deletion blocked: at least one order references the customer."""

    code = "CUSTOMER_HAS_ORDERS"

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(
            f"Cannot delete customer. Customer has {count} order(s). "
            "Please delete the orders first.",
            details={"count": count},
        )
