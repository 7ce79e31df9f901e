"""Persisted refresh-token record."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .base import new_id, utcnow


@dataclass(slots=True)
class RefreshToken:
    """
    Server-side mirror of an issued refresh JWT.

    ``token`` is looked up by exact match only. ``is_revoked`` is monotonic:
    once set it never goes back to ``False``.
    """

    token: str
    user_id: str
    expires_at: datetime
    is_revoked: bool = False
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expires_at <= (now or utcnow())

    def revoke(self) -> None:
        self.is_revoked = True
