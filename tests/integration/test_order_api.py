"""Integration tests for Order API endpoints.

Covers:
- Creation with items (price snapshot, default status, validation).
- Representation: camelCase keys, nested items and customer.
- Header-only updates, deletion, filters.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from modules.orders.models import Order, OrderItem
from modules.products.models import Product

pytestmark = pytest.mark.integration

URL = "/api/orders"


def _create_payload(customer, product, **overrides) -> dict:
    payload = {
        "customerId": str(customer.id),
        "items": [{"productId": str(product.id), "quantity": 2, "price": "10.00"}],
    }
    payload.update(overrides)
    return payload


class TestOrderCreate:
    def test_example_order(self, api_client, customer, product):
        response = api_client.post(URL, _create_payload(customer, product), format="json")

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "PENDING"
        assert data["customerId"] == str(customer.id)
        assert len(data["items"]) == 1
        item = data["items"][0]
        assert item["price"] == "10.00"
        assert item["quantity"] == 2
        assert item["productId"] == str(product.id)
        assert item["orderId"] == data["id"]
        assert data["customer"]["name"] == "Alice"

    def test_representation_keys(self, api_client, customer, product):
        data = api_client.post(URL, _create_payload(customer, product), format="json").json()
        assert set(data) == {"id", "customerId", "status", "createdAt", "items", "customer"}
        assert set(data["items"][0]) == {"id", "orderId", "productId", "quantity", "price"}
        assert set(data["customer"]) == {"id", "name", "email", "phone", "createdAt"}

    def test_explicit_status(self, api_client, customer, product):
        response = api_client.post(
            URL, _create_payload(customer, product, status="COMPLETED"), format="json"
        )
        assert response.json()["status"] == "COMPLETED"

    def test_items_keep_request_order(self, api_client, customer, product):
        other = Product.objects.create(name="Gadget", price=Decimal("3.00"))
        payload = _create_payload(
            customer,
            product,
            items=[
                {"productId": str(other.id), "quantity": 1, "price": "3.00"},
                {"productId": str(product.id), "quantity": 4, "price": "10.00"},
            ],
        )
        data = api_client.post(URL, payload, format="json").json()
        assert [i["productId"] for i in data["items"]] == [str(other.id), str(product.id)]

    def test_empty_items(self, api_client, customer, product):
        response = api_client.post(
            URL, _create_payload(customer, product, items=[]), format="json"
        )
        assert response.status_code == 400
        assert "items" in response.json()["error"]["details"]["fieldErrors"]
        assert Order.objects.count() == 0

    @pytest.mark.parametrize(
        "item",
        [
            {"quantity": 0, "price": "10.00"},
            {"quantity": 1, "price": "0"},
            {"quantity": 1, "price": "-5.00"},
        ],
    )
    def test_invalid_item(self, api_client, customer, product, item):
        item["productId"] = str(product.id)
        response = api_client.post(
            URL, _create_payload(customer, product, items=[item]), format="json"
        )
        assert response.status_code == 400
        assert Order.objects.count() == 0

    def test_unknown_status(self, api_client, customer, product):
        response = api_client.post(
            URL, _create_payload(customer, product, status="SHIPPED"), format="json"
        )
        assert response.status_code == 400

    def test_unknown_customer(self, api_client, product):
        payload = {
            "customerId": str(uuid.uuid4()),
            "items": [{"productId": str(product.id), "quantity": 1, "price": "10.00"}],
        }
        response = api_client.post(URL, payload, format="json")

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "BAD_REQUEST"
        assert error["details"]["field"] == "customerId"
        assert Order.objects.count() == 0
        assert OrderItem.objects.count() == 0

    def test_unknown_product(self, api_client, customer, product):
        payload = _create_payload(
            customer,
            product,
            items=[{"productId": str(uuid.uuid4()), "quantity": 1, "price": "1.00"}],
        )
        response = api_client.post(URL, payload, format="json")
        assert response.status_code == 400
        assert response.json()["error"]["details"]["field"] == "items.productId"
        assert Order.objects.count() == 0


class TestOrderRead:
    def test_list_newest_first(self, api_client, customer, order):
        newer = Order.objects.create(customer=customer, status="COMPLETED")
        data = api_client.get(URL).json()
        assert [o["id"] for o in data] == [str(newer.id), str(order.id)]
        assert data[1]["items"][0]["price"] == "10.00"

    def test_filter_by_status(self, api_client, customer, order):
        Order.objects.create(customer=customer, status="CANCELLED")
        data = api_client.get(URL, {"status": "pending"}).json()
        assert [o["id"] for o in data] == [str(order.id)]

    def test_filter_by_customer(self, api_client, order):
        from modules.customers.models import Customer

        other = Customer.objects.create(name="Bob", email="b@x.com")
        Order.objects.create(customer=other)
        data = api_client.get(URL, {"customer": str(order.customer_id)}).json()
        assert [o["id"] for o in data] == [str(order.id)]

    def test_retrieve(self, api_client, order):
        response = api_client.get(f"{URL}/{order.id}")
        assert response.status_code == 200
        assert response.json()["customer"]["email"] == "a@x.com"

    def test_not_found(self, api_client):
        response = api_client.get(f"{URL}/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["error"] == {
            "code": "NOT_FOUND",
            "message": "Order not found",
        }


class TestOrderUpdate:
    @pytest.mark.parametrize("method", ["put", "patch"])
    def test_status_only(self, api_client, order, customer, method):
        response = getattr(api_client, method)(
            f"{URL}/{order.id}", {"status": "COMPLETED"}, format="json"
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "COMPLETED"
        assert data["customerId"] == str(customer.id)
        assert len(data["items"]) == 1

    def test_items_key_is_ignored(self, api_client, order, product):
        response = api_client.put(
            f"{URL}/{order.id}",
            {
                "status": "CANCELLED",
                "items": [{"productId": str(product.id), "quantity": 9, "price": "1.00"}],
            },
            format="json",
        )
        assert response.status_code == 200
        assert OrderItem.objects.get(order=order).quantity == 2

    @pytest.mark.parametrize(
        "items",
        [
            [],
            [{"quantity": 1, "price": "1.00"}],
            [{"productId": "not-a-uuid", "quantity": 1, "price": "1.00"}],
            [{"productId": str(uuid.uuid4()), "quantity": 0, "price": "1.00"}],
        ],
    )
    def test_malformed_items_rejected(self, api_client, order, items):
        response = api_client.put(
            f"{URL}/{order.id}", {"status": "COMPLETED", "items": items}, format="json"
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "BAD_REQUEST"
        assert "items" in error["details"]["fieldErrors"]
        order.refresh_from_db()
        assert order.status == "PENDING"

    def test_change_customer(self, api_client, order):
        from modules.customers.models import Customer

        other = Customer.objects.create(name="Bob", email="b@x.com")
        response = api_client.patch(
            f"{URL}/{order.id}", {"customerId": str(other.id)}, format="json"
        )
        assert response.json()["customer"]["name"] == "Bob"

    def test_unknown_customer(self, api_client, order):
        response = api_client.patch(
            f"{URL}/{order.id}", {"customerId": str(uuid.uuid4())}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["error"]["details"]["field"] == "customerId"

    def test_not_found(self, api_client):
        response = api_client.put(
            f"{URL}/{uuid.uuid4()}", {"status": "COMPLETED"}, format="json"
        )
        assert response.status_code == 404


class TestOrderDelete:
    def test_delete_removes_items(self, api_client, order):
        response = api_client.delete(f"{URL}/{order.id}")

        assert response.status_code == 204
        assert OrderItem.objects.filter(order_id=order.id).count() == 0
        assert api_client.get(f"{URL}/{order.id}").status_code == 404

    def test_customer_and_product_deletable_afterwards(self, api_client, order, customer, product):
        api_client.delete(f"{URL}/{order.id}")
        assert api_client.delete(f"/api/customers/{customer.id}").status_code == 204
        assert api_client.delete(f"/api/products/{product.id}").status_code == 204

    def test_not_found(self, api_client):
        response = api_client.delete(f"{URL}/{uuid.uuid4()}")
        assert response.status_code == 404
