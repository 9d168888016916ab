"""Shared error taxonomy and the API error envelope.

Services raise ``DomainError`` subclasses when a business rule is
violated.  Repositories raise ``UniqueViolation`` / ``ReferenceViolation``
so that constraint failures reported by the database arrive at the
service layer already classified by column.

``exception_handler`` is installed as DRF's ``EXCEPTION_HANDLER`` and
renders every failure as::

    {"error": {"code": "...", "message": "...", "details": {...}}}
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import PermissionDenied
from django.http import Http404
from pydantic import ValidationError as PydanticValidationError
from rest_framework import exceptions, status
from rest_framework.response import Response

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Something went wrong"


class DomainError(Exception):
    """Base class for classified failures surfaced to API clients."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "BAD_REQUEST"
    default_message: str = "Request could not be processed."

    def __init__(
        self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class NotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    default_message = "Resource not found"


class ReferenceViolation(DomainError):
    """A referenced row (customer, product) does not exist."""

    default_message = "Referenced record does not exist"

    def __init__(self, field: str, value: Any = None) -> None:
        self.field = field
        self.value = value
        details: Dict[str, Any] = {"field": field}
        if value is not None:
            details["value"] = str(value)
        super().__init__(f"Referenced {field} does not exist", details)


class UniqueViolation(Exception):
    """Typed result of a unique-constraint rejection from the store.

    ``field`` names the column whose value collided.
    """

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Unique constraint violated on '{field}'.")


# ---------------------------------------------------------------------------
# DRF exception handler
# ---------------------------------------------------------------------------


def _error_body(
    code: str, message: str, details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"error": error}


def _flatten_drf_errors(detail: Any) -> Dict[str, Any]:
    """Split DRF error detail into form-level and field-level messages."""
    form_errors: list = []
    field_errors: Dict[str, Any] = {}
    if isinstance(detail, dict):
        for key, value in detail.items():
            if key == "non_field_errors":
                form_errors.extend(value if isinstance(value, list) else [value])
            else:
                field_errors[key] = value
    elif isinstance(detail, list):
        form_errors.extend(detail)
    else:
        form_errors.append(detail)
    return {"formErrors": form_errors, "fieldErrors": field_errors}


def _flatten_pydantic_errors(exc: PydanticValidationError) -> Dict[str, Any]:
    form_errors: list = []
    field_errors: Dict[str, list] = {}
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"])
        if loc:
            field_errors.setdefault(loc, []).append(error["msg"])
        else:
            form_errors.append(error["msg"])
    return {"formErrors": form_errors, "fieldErrors": field_errors}


def exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Translate any exception raised by a view into the error envelope."""
    if isinstance(exc, DomainError):
        return Response(
            _error_body(exc.code, exc.message, exc.details),
            status=exc.status_code,
        )

    if isinstance(exc, PydanticValidationError):
        return Response(
            _error_body("BAD_REQUEST", "Validation error", _flatten_pydantic_errors(exc)),
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied()

    if isinstance(exc, (exceptions.ValidationError, exceptions.ParseError)):
        return Response(
            _error_body("BAD_REQUEST", "Validation error", _flatten_drf_errors(exc.detail)),
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, exceptions.APIException):
        headers = {}
        if getattr(exc, "wait", None):
            headers["Retry-After"] = str(int(exc.wait))
        return Response(
            _error_body(str(exc.default_code).upper(), str(exc.detail)),
            status=exc.status_code,
            headers=headers,
        )

    view = context.get("view")
    logger.exception(
        "api.unhandled_exception",
        view=view.__class__.__name__ if view is not None else None,
        error_type=type(exc).__name__,
    )
    return Response(
        _error_body("INTERNAL_ERROR", INTERNAL_ERROR_MESSAGE),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
