# blogapi/services/comments/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommentCreateIn:
    """
    Input DTO for a new comment.

    :param content: Required; checked by the service.
    :param parent_comment_id: Linked only when that comment exists.
    """

    content: str | None = None
    parent_comment_id: str | None = None


@dataclass(frozen=True, slots=True)
class CommentUpdateIn:
    content: str | None = None
