"""Domain entities kept in the in-memory data store."""

from __future__ import annotations

from .comment import DELETED_CONTENT, Comment
from .post import Post, PostStatus, default_excerpt, slugify
from .refresh_token import RefreshToken
from .social import Follow, Like, LikeTarget
from .tag import Tag
from .user import Role, User

__all__ = [
    "Comment",
    "DELETED_CONTENT",
    "Follow",
    "Like",
    "LikeTarget",
    "Post",
    "PostStatus",
    "RefreshToken",
    "Role",
    "Tag",
    "User",
    "default_excerpt",
    "slugify",
]
