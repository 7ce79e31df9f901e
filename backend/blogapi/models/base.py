"""Shared helpers for the in-memory entity dataclasses."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4


def utcnow() -> datetime:
    """Return the current timezone-aware UTC timestamp."""
    return datetime.now(UTC)


def new_id() -> str:
    """Return a fresh random identifier (uuid4, string form)."""
    return str(uuid4())
