from decimal import Decimal

import pytest

from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def customer():
    from modules.customers.models import Customer

    return Customer.objects.create(name="Alice", email="a@x.com")


@pytest.fixture()
def product():
    from modules.products.models import Product

    return Product.objects.create(name="Widget", price=Decimal("10.00"), stock=5)


@pytest.fixture()
def order(customer, product):
    """A persisted PENDING order with a single item (2 x 10.00)."""
    from modules.orders.models import Order, OrderItem

    order = Order.objects.create(customer=customer)
    OrderItem.objects.create(
        order=order, product=product, quantity=2, price=Decimal("10.00")
    )
    return order
