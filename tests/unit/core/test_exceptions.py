"""Unit tests for the API error envelope produced by ``exception_handler``."""

from __future__ import annotations

import uuid

import pytest
from django.http import Http404
from pydantic import BaseModel, ValidationError as PydanticValidationError
from rest_framework import exceptions

from modules.core.exceptions import (
    INTERNAL_ERROR_MESSAGE,
    DomainError,
    NotFound,
    ReferenceViolation,
    exception_handler,
)
from modules.core.validators import parse_uuid
from modules.customers.exceptions import CustomerHasOrders, DuplicatePhone

pytestmark = pytest.mark.unit


def _handle(exc):
    return exception_handler(exc, {"view": None})


class TestDomainErrors:
    def test_not_found(self):
        response = _handle(NotFound("Thing not found"))
        assert response.status_code == 404
        assert response.data == {
            "error": {"code": "NOT_FOUND", "message": "Thing not found"}
        }

    def test_domain_error_carries_details(self):
        response = _handle(CustomerHasOrders(3))
        assert response.status_code == 400
        assert response.data["error"]["code"] == "CUSTOMER_HAS_ORDERS"
        assert "3 order(s)" in response.data["error"]["message"]
        assert response.data["error"]["details"] == {"count": 3}

    def test_duplicate_phone(self):
        response = _handle(DuplicatePhone())
        assert response.data["error"] == {
            "code": "DUPLICATE_PHONE",
            "message": "A customer with this phone number already exists",
            "details": {"field": "phone"},
        }

    def test_reference_violation_is_generic_bad_request(self):
        missing = uuid.uuid4()
        response = _handle(ReferenceViolation("customerId", missing))
        assert response.status_code == 400
        assert response.data["error"]["code"] == "BAD_REQUEST"
        assert response.data["error"]["details"] == {
            "field": "customerId",
            "value": str(missing),
        }

    def test_default_message(self):
        assert DomainError().message == "Request could not be processed."


class TestValidationErrors:
    def test_drf_validation_error_split_into_field_errors(self):
        exc = exceptions.ValidationError(
            {"email": ["Enter a valid email address."], "non_field_errors": ["Bad."]}
        )
        response = _handle(exc)
        assert response.status_code == 400
        assert response.data["error"]["code"] == "BAD_REQUEST"
        assert response.data["error"]["details"] == {
            "formErrors": ["Bad."],
            "fieldErrors": {"email": ["Enter a valid email address."]},
        }

    def test_parse_error(self):
        response = _handle(exceptions.ParseError("JSON parse error"))
        assert response.status_code == 400
        assert response.data["error"]["details"]["formErrors"] == ["JSON parse error"]

    def test_pydantic_validation_error(self):
        class Model(BaseModel):
            quantity: int

        with pytest.raises(PydanticValidationError) as exc_info:
            Model(quantity="many")

        response = _handle(exc_info.value)
        assert response.status_code == 400
        assert "quantity" in response.data["error"]["details"]["fieldErrors"]

    def test_parse_uuid_rejects_garbage(self):
        with pytest.raises(exceptions.ValidationError) as exc_info:
            parse_uuid("not-a-uuid")
        response = _handle(exc_info.value)
        assert response.data["error"]["details"]["fieldErrors"] == {
            "id": ["Must be a valid UUID."]
        }


class TestOtherErrors:
    def test_http404(self):
        response = _handle(Http404())
        assert response.status_code == 404
        assert response.data["error"]["code"] == "NOT_FOUND"

    def test_method_not_allowed(self):
        response = _handle(exceptions.MethodNotAllowed("PATCH"))
        assert response.status_code == 405
        assert response.data["error"]["code"] == "METHOD_NOT_ALLOWED"

    def test_unexpected_exception_is_hidden(self):
        response = _handle(RuntimeError("db password is hunter2"))
        assert response.status_code == 500
        assert response.data == {
            "error": {"code": "INTERNAL_ERROR", "message": INTERNAL_ERROR_MESSAGE}
        }
