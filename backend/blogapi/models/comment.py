"""Comment model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .base import new_id, utcnow

DELETED_CONTENT = "[deleted]"


@dataclass(slots=True)
class Comment:
    """
    Comment on a post, optionally replying to another comment.

    ``parent_comment_id`` stores the id of the parent, never the object.
    """

    content: str
    author_id: str
    post_id: str
    parent_comment_id: str | None = None
    is_deleted: bool = False
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def soft_delete(self) -> None:
        """Blank the content with the sentinel while keeping the record and its thread."""
        self.content = DELETED_CONTENT
        self.updated_at = utcnow()
