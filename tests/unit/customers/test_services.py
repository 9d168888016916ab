"""Unit tests for CustomerService.

Covers:
- create_customer / update_customer: duplicate email and phone mapping.
- update_customer: partial update, not found.
- delete_customer: order guard, concurrent order race, not found.
- get_customer: not found.
"""

from __future__ import annotations

import uuid
from unittest.mock import MagicMock

import pytest
from django.db.models import ProtectedError

from modules.core.exceptions import UniqueViolation
from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
from modules.customers.exceptions import (
    CustomerHasOrders,
    CustomerNotFound,
    DuplicateEmail,
    DuplicatePhone,
)
from modules.customers.models import Customer
from modules.customers.repositories import CustomerDjangoRepository
from modules.customers.services import CustomerService
from modules.orders.models import Order

pytestmark = pytest.mark.unit


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def service(mock_repo):
    return CustomerService(repository=mock_repo)


# ===========================================================================
# create_customer
# ===========================================================================


class TestCreateCustomer:
    def test_success(self, service, mock_repo):
        mock_repo.save.side_effect = lambda c: c

        customer = service.create_customer(
            CreateCustomerDTO(name="Alice", email="a@x.com", phone="+1-555-0101")
        )

        assert customer.name == "Alice"
        assert customer.email == "a@x.com"
        assert customer.phone == "+1-555-0101"
        mock_repo.save.assert_called_once()

    def test_duplicate_email(self, service, mock_repo):
        mock_repo.save.side_effect = UniqueViolation("email")
        with pytest.raises(DuplicateEmail) as exc_info:
            service.create_customer(CreateCustomerDTO(name="Alice", email="a@x.com"))
        assert exc_info.value.code == "DUPLICATE_EMAIL"
        assert exc_info.value.message == "A customer with this email already exists"

    def test_duplicate_phone(self, service, mock_repo):
        mock_repo.save.side_effect = UniqueViolation("phone")
        with pytest.raises(DuplicatePhone) as exc_info:
            service.create_customer(
                CreateCustomerDTO(name="Alice", email="a@x.com", phone="123")
            )
        assert exc_info.value.code == "DUPLICATE_PHONE"

    def test_same_email_twice_against_store(self):
        service = CustomerService(repository=CustomerDjangoRepository())
        service.create_customer(CreateCustomerDTO(name="Alice", email="a@x.com"))
        with pytest.raises(DuplicateEmail):
            service.create_customer(CreateCustomerDTO(name="Alicia", email="a@x.com"))
        assert Customer.objects.filter(email="a@x.com").count() == 1

    def test_distinct_emails_both_succeed(self):
        service = CustomerService(repository=CustomerDjangoRepository())
        service.create_customer(CreateCustomerDTO(name="Alice", email="a@x.com"))
        service.create_customer(CreateCustomerDTO(name="Bob", email="b@x.com"))
        assert Customer.objects.count() == 2


# ===========================================================================
# update_customer
# ===========================================================================


class TestUpdateCustomer:
    def test_applies_only_supplied_fields(self, service, mock_repo):
        existing = Customer(name="Alice", email="a@x.com", phone="123")
        mock_repo.get_by_id.return_value = existing
        mock_repo.save.side_effect = lambda c: c

        updated = service.update_customer(existing.id, UpdateCustomerDTO(name="Alicia"))

        assert updated.name == "Alicia"
        assert updated.email == "a@x.com"
        assert updated.phone == "123"

    def test_clears_phone(self, service, mock_repo):
        existing = Customer(name="Alice", email="a@x.com", phone="123")
        mock_repo.get_by_id.return_value = existing
        mock_repo.save.side_effect = lambda c: c

        updated = service.update_customer(existing.id, UpdateCustomerDTO(phone=None))

        assert updated.phone is None

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(CustomerNotFound):
            service.update_customer(uuid.uuid4(), UpdateCustomerDTO(name="X"))
        mock_repo.save.assert_not_called()

    def test_email_collision(self, service, mock_repo):
        mock_repo.get_by_id.return_value = Customer(name="Alice", email="a@x.com")
        mock_repo.save.side_effect = UniqueViolation("email")
        with pytest.raises(DuplicateEmail):
            service.update_customer(uuid.uuid4(), UpdateCustomerDTO(email="b@x.com"))


# ===========================================================================
# delete_customer
# ===========================================================================


class TestDeleteCustomer:
    def test_success(self, service, mock_repo):
        customer_id = uuid.uuid4()
        mock_repo.count_orders.return_value = 0
        mock_repo.delete.return_value = True

        service.delete_customer(customer_id)

        mock_repo.delete.assert_called_once_with(customer_id)

    def test_blocked_by_orders(self, service, mock_repo):
        mock_repo.count_orders.return_value = 2

        with pytest.raises(CustomerHasOrders) as exc_info:
            service.delete_customer(uuid.uuid4())

        assert exc_info.value.count == 2
        assert exc_info.value.message == (
            "Cannot delete customer. Customer has 2 order(s). "
            "Please delete the orders first."
        )
        mock_repo.delete.assert_not_called()

    def test_order_created_after_count(self, service, mock_repo):
        mock_repo.count_orders.side_effect = [0, 1]
        mock_repo.delete.side_effect = ProtectedError("protected", set())

        with pytest.raises(CustomerHasOrders) as exc_info:
            service.delete_customer(uuid.uuid4())

        assert exc_info.value.count == 1

    def test_not_found(self, service, mock_repo):
        mock_repo.count_orders.return_value = 0
        mock_repo.delete.return_value = False
        with pytest.raises(CustomerNotFound):
            service.delete_customer(uuid.uuid4())

    def test_guard_against_store(self, customer):
        Order.objects.create(customer=customer)
        Order.objects.create(customer=customer)
        service = CustomerService(repository=CustomerDjangoRepository())

        with pytest.raises(CustomerHasOrders) as exc_info:
            service.delete_customer(customer.id)

        assert exc_info.value.count == 2
        assert Customer.objects.filter(id=customer.id).exists()


class TestGetCustomer:
    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(CustomerNotFound):
            service.get_customer(uuid.uuid4())
