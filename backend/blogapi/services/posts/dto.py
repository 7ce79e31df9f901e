# blogapi/services/posts/dto.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class PostCreateIn:
    """
    Input DTO for post creation.

    ``title`` and ``content`` are optional at this level so the service can
    report a missing field with its own message.

    :param status: Defaults to ``draft`` when omitted.
    :param tag_ids: Unknown ids are dropped.
    """

    title: str | None = None
    content: str | None = None
    excerpt: str | None = None
    status: str | None = None
    tag_ids: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PostUpdateIn:
    """
    Partial update. ``None`` (or an empty string) leaves the field untouched.

    :param tag_ids: When given, replaces the whole tag set.
    """

    title: str | None = None
    content: str | None = None
    excerpt: str | None = None
    status: str | None = None
    tag_ids: list[str] | None = None


@dataclass(frozen=True, slots=True)
class PostListIn:
    """
    Filters for the public post listing.

    :param tag: Tag name (exact).
    :param author: Author username (exact).
    :param status: Defaults to ``published`` when omitted.
    :param search: Case-insensitive substring of the title.
    :param sort: ``createdAt`` | ``title`` | ``viewCount`` | ``updatedAt``.
    :param order: ``asc`` | ``desc``.
    """

    tag: str | None = None
    author: str | None = None
    status: str | None = None
    search: str | None = None
    sort: str = "createdAt"
    order: str = "desc"


@dataclass(frozen=True, slots=True)
class PostStatsOut:
    post_id: str
    likes: int
    comments: int
    views: int
