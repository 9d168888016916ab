"""Unit tests for the Product model.

Covers:
- Valid creation with all fields.
- Price > 0 validation (application + DB constraint).
- Stock default.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from modules.products.models import Product

pytestmark = pytest.mark.unit


class TestProductModel:
    def test_create(self):
        product = Product.objects.create(name="Widget", price=Decimal("10.00"), stock=5)
        product.refresh_from_db()
        assert product.price == Decimal("10.00")
        assert product.stock == 5

    def test_stock_defaults_to_zero(self):
        assert Product.objects.create(name="Widget", price=Decimal("1.00")).stock == 0

    def test_full_clean_rejects_zero_price(self):
        product = Product(name="Widget", price=Decimal("0.00"))
        with pytest.raises(ValidationError) as exc_info:
            product.full_clean()
        assert "price" in exc_info.value.message_dict

    def test_database_rejects_non_positive_price(self):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Product.objects.create(name="Widget", price=Decimal("-1.00"))
