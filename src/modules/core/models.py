"""Base abstract model shared by every aggregate in the system.

Provides ``BaseModel``: UUIDv7 primary key + immutable ``created_at``.

UUIDv7 keys are time-ordered, so ``-created_at, -id`` gives a stable
newest-first ordering even when several rows share a timestamp.
"""

from __future__ import annotations

import uuid6
from django.db import models


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and creation timestamp."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
