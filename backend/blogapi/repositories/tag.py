"""Tag repository."""

from __future__ import annotations

from blogapi.models.tag import Tag
from blogapi.repositories.base import Exact, InMemoryRepository


class TagRepository(InMemoryRepository[Tag]):
    entity = Tag

    def _sortable_fields(self):
        return {"name": "name", "created_at": "created_at", "createdAt": "created_at"}

    def _unique_fields(self):
        return ("slug",)

    def get_by_slug(self, slug: str) -> Tag | None:
        return self.find_first([Exact("slug", slug)])

    def existing_ids(self, tag_ids: list[str]) -> list[str]:
        """Keep only ids of tags that exist, preserving order and dropping repeats."""
        kept: list[str] = []
        with self._lock:
            for tag_id in tag_ids:
                if tag_id in self._rows and tag_id not in kept:
                    kept.append(tag_id)
        return kept
