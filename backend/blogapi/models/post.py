"""Post model and the slug/excerpt rules applied on write."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from .base import new_id, utcnow

EXCERPT_LENGTH = 200
_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


class PostStatus(StrEnum):
    DRAFT = "draft"
    PUBLISHED = "published"


def slugify(title: str) -> str:
    """Lowercase ``title`` and collapse every run of non ``[a-z0-9]`` into ``-``.

    >>> slugify("Hello, World!")
    'hello-world-'
    """
    return _SLUG_STRIP.sub("-", title.lower())


def default_excerpt(content: str) -> str:
    """Return the first ``EXCERPT_LENGTH`` characters of ``content`` plus ``...``."""
    return content[:EXCERPT_LENGTH] + "..."


@dataclass(slots=True)
class Post:
    """
    Blog post authored by a single user.

    Fields
    ------
    slug : str
        Derived from ``title``; regenerated whenever the title changes.
    tag_ids : list[str]
        Many-to-many link to :class:`~blogapi.models.tag.Tag` by id.
    view_count : int
        Incremented by every single-post read.
    """

    title: str
    content: str
    author_id: str
    excerpt: str = ""
    slug: str = ""
    status: PostStatus = PostStatus.DRAFT
    tag_ids: list[str] = field(default_factory=list)
    view_count: int = 0
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        if not self.slug:
            self.slug = slugify(self.title)
        if not self.excerpt:
            self.excerpt = default_excerpt(self.content)
