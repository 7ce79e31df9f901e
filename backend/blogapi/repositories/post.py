"""Post repository."""

from __future__ import annotations

from blogapi.models.post import Post
from blogapi.repositories.base import Exact, InMemoryRepository


class PostRepository(InMemoryRepository[Post]):
    entity = Post

    def _sortable_fields(self):
        """Public sort keys accepted by the post listing."""
        return {
            "createdAt": "created_at",
            "created_at": "created_at",
            "updatedAt": "updated_at",
            "updated_at": "updated_at",
            "title": "title",
            "viewCount": "view_count",
            "view_count": "view_count",
        }

    def _updatable_fields(self):
        return {"title", "slug", "content", "excerpt", "status", "tag_ids"}

    def _relations(self):
        return {"author_id": "users", "tag_ids": "tags"}

    def get_by_slug(self, slug: str) -> Post | None:
        return self.find_first([Exact("slug", slug)])

    def increment_views(self, post: Post) -> Post:
        """Bump ``view_count`` without touching ``updated_at``."""
        with self._lock:
            post.view_count += 1
            return post
