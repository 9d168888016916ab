"""Order DRF serializers for API input/output.

The serializers operate at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from modules.customers.serializers import CustomerSerializer
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    """Validates a single item in an order creation request."""

    productId = serializers.UUIDField(source="product_id")
    quantity = serializers.IntegerField(min_value=1)
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0.01")
    )


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    customerId = serializers.UUIDField(source="customer_id")
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    items = CreateOrderItemSerializer(many=True, allow_empty=False)


class UpdateOrderSerializer(serializers.Serializer):
    """Validates order updates.

    ``items`` is shape-checked like on creation but never applied; line
    items cannot change once the order exists.
    """

    customerId = serializers.UUIDField(source="customer_id", required=False)
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    items = CreateOrderItemSerializer(many=True, allow_empty=False, required=False)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    """Read serializer for order items with the snapshotted price."""

    orderId = serializers.UUIDField(source="order_id", read_only=True)
    productId = serializers.UUIDField(source="product_id", read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "orderId", "productId", "quantity", "price"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested items and customer."""

    customerId = serializers.UUIDField(source="customer_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    customer = CustomerSerializer(read_only=True)

    class Meta:
        model = Order
        fields = ["id", "customerId", "status", "createdAt", "items", "customer"]
        read_only_fields = fields
