"""Customer model.

Business rules implemented:
- Email must be unique in the system.
- Phone is optional but unique when present (NULL for "no phone", so
  several customers without a phone never collide).
- A customer referenced by an order cannot be deleted (``PROTECT`` on
  ``Order.customer``, pre-checked by the service layer).
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Customer(BaseModel):
    """Customer aggregate root."""

    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254, unique=True)
    phone = models.CharField(max_length=32, unique=True, null=True, blank=True)

    class Meta:
        db_table = "customers"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["-created_at"], name="customers_created_idx"),
        ]

    def save(self, *args, **kwargs) -> None:
        if not self.phone:
            self.phone = None
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
