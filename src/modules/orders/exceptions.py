"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
``modules.core.exceptions.exception_handler`` translates them into
HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import DomainError, NotFound


class OrderNotFound(NotFound):
    """The requested order does not exist."""

    default_message = "Order not found"


class InvalidOrderStatus(DomainError):
    """The requested status transition is not allowed."""
