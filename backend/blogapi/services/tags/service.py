# blogapi/services/tags/service.py
from __future__ import annotations

from blogapi.models.tag import Tag
from blogapi.repositories.base import Contains, Filter
from blogapi.services._shared.base import BaseService


class TagService(BaseService):
    def list_tags(self, *, search: str | None = None) -> list[Tag]:
        """All tags ordered by name; ``search`` keeps names containing it."""
        filters: list[Filter] = []
        if search:
            filters.append(Contains("name", search))
        return self.store.tags.find(filters, sort=["name"])
