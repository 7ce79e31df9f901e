"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    LoginResponseSchema,
    LoginSchema,
    LogoutSchema,
    RefreshSchema,
    TokenPairSchema,
    VerifyResponseSchema,
)
from .comment import (
    CommentCreateSchema,
    CommentListQuerySchema,
    CommentSchema,
    CommentUpdateSchema,
)
from .common import PaginationQuerySchema, QueryFilterSchema, build_pagination, paginated
from .post import (
    PostCreateSchema,
    PostListQuerySchema,
    PostSchema,
    PostStatsSchema,
    PostUpdateSchema,
)
from .social import FollowSchema, LikeSchema, LikeToggleSchema
from .tag import TagFilterSchema, TagSchema
from .user import UserFilterSchema, UserPostsQuerySchema, UserSchema

__all__ = [
    "LoginSchema",
    "LoginResponseSchema",
    "LogoutSchema",
    "RefreshSchema",
    "TokenPairSchema",
    "VerifyResponseSchema",
    "PaginationQuerySchema",
    "QueryFilterSchema",
    "build_pagination",
    "paginated",
    "PostSchema",
    "PostCreateSchema",
    "PostUpdateSchema",
    "PostListQuerySchema",
    "PostStatsSchema",
    "CommentSchema",
    "CommentCreateSchema",
    "CommentUpdateSchema",
    "CommentListQuerySchema",
    "LikeSchema",
    "LikeToggleSchema",
    "FollowSchema",
    "TagSchema",
    "TagFilterSchema",
    "UserSchema",
    "UserFilterSchema",
    "UserPostsQuerySchema",
]
