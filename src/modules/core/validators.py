"""Request-surface helpers shared by the module views."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from rest_framework.exceptions import ValidationError


def parse_uuid(value: Optional[str], field: str = "id") -> UUID:
    """Parse a path parameter as a UUID or raise a 400 validation error."""
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationError({field: ["Must be a valid UUID."]}) from None
