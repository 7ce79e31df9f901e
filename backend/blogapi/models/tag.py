"""Tag model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .base import new_id, utcnow


@dataclass(slots=True)
class Tag:
    name: str
    slug: str
    description: str | None = None
    color: str = "#6b7280"
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
