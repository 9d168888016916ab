"""Product model with price and stock constraints.

Business rules implemented:
- Price must be greater than zero (CHECK constraint + validator).
- Stock cannot be negative (``PositiveIntegerField``).
- A product referenced by an order item cannot be deleted (``PROTECT``
  on ``OrderItem.product``, pre-checked by the service layer).
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Product(BaseModel):
    """Product aggregate root."""

    name = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    stock = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.price})"
