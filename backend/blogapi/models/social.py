"""Like and follow relationships between users and content."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from .base import new_id, utcnow


class LikeTarget(StrEnum):
    POST = "post"
    COMMENT = "comment"


@dataclass(slots=True)
class Like:
    """A user's like on a post or a comment, unique per (user, target_type, target_id)."""

    user_id: str
    target_type: LikeTarget
    target_id: str
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)


@dataclass(slots=True)
class Follow:
    """``follower_id`` follows ``following_id``; unique per pair, never self."""

    follower_id: str
    following_id: str
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
