"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single order line item.
- ``CreateOrderDTO``: input for order creation (nested items).
- ``UpdateOrderDTO``: input for order updates (customer / status only).
"""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator


class OrderStatusEnum(StrEnum):
    """Order status (framework-agnostic, not Django TextChoices)."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single item in an order creation request.

    ``price`` is the unit price the caller snapshots from the catalog
    when building the order; it is stored as given.
    """

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int
    price: Decimal

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates:
    - ``items`` must contain at least one item.
    - Each item quantity and price must be positive.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: UUID
    status: OrderStatusEnum = OrderStatusEnum.PENDING
    items: List[CreateOrderItemDTO]

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v


class UpdateOrderDTO(BaseModel):
    """Immutable DTO for order update requests.

    Only the customer and the status can change; line items are fixed
    once the order exists.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: Optional[UUID] = None
    status: Optional[OrderStatusEnum] = None

    def changes(self) -> dict:
        """Return the supplied, non-null fields."""
        return {
            field: value
            for field, value in self.model_dump(include=self.model_fields_set).items()
            if value is not None
        }
