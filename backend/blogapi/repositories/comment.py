"""Comment repository."""

from __future__ import annotations

from blogapi.models.comment import Comment
from blogapi.repositories.base import InMemoryRepository


class CommentRepository(InMemoryRepository[Comment]):
    entity = Comment

    def _updatable_fields(self):
        return {"content"}

    def _relations(self):
        return {"author_id": "users", "post_id": "posts"}
