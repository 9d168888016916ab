"""Order domain constants.

Defines status choices and the allowed status transitions.  Every
status may currently be set from every other one; narrowing the
lifecycle is a matter of editing ``VALID_TRANSITIONS``.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    COMPLETED = "COMPLETED", "Completed"
    CANCELLED = "CANCELLED", "Cancelled"


VALID_TRANSITIONS: dict[str, set[str]] = {
    status: set(OrderStatus.values) for status in OrderStatus.values
}

INITIAL_STATUS = OrderStatus.PENDING
