"""Customer DRF serializers for API input/output.

The serializers operate at the Interface layer (API Views).  They
handle request shape validation and response rendering only; the
uniqueness rules are enforced by the Service Layer so that collisions
are reported with field-specific error codes.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    """Read serializer for the Customer resource."""

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Customer
        fields = ["id", "name", "email", "phone", "createdAt"]
        read_only_fields = fields


class CustomerInputSerializer(serializers.Serializer):
    """Validates create (full) and update (``partial=True``) payloads."""

    name = serializers.CharField(min_length=1, max_length=255)
    email = serializers.EmailField(max_length=254)
    phone = serializers.CharField(
        min_length=3, max_length=32, required=False, allow_null=True
    )
