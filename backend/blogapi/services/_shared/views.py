"""Read models handed to the API layer.

Entities store references by id; views resolve them into the nested objects
the client expects (author, tags, follower ...). Password data never leaves
through a view: :class:`~blogapi.models.user.User` is dumped by a schema
that has no password field.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import TypeVar

from blogapi.models.comment import Comment
from blogapi.models.post import Post
from blogapi.models.social import Follow, Like
from blogapi.models.tag import Tag
from blogapi.models.user import User
from blogapi.repositories.base import Page
from blogapi.repositories.store import DataStore

S = TypeVar("S")
T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PostView:
    id: str
    title: str
    content: str
    excerpt: str
    slug: str
    status: str
    view_count: int
    author: User | None
    tags: list[Tag]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class CommentView:
    id: str
    content: str
    post_id: str
    parent_comment_id: str | None
    is_deleted: bool
    author: User | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class LikeView:
    id: str
    target_type: str
    target_id: str
    user: User | None
    created_at: datetime


@dataclass(frozen=True, slots=True)
class FollowView:
    id: str
    follower: User | None
    following: User | None
    created_at: datetime


def post_view(store: DataStore, post: Post) -> PostView:
    tags = [tag for tag in (store.tags.get(tid) for tid in post.tag_ids) if tag is not None]
    return PostView(
        id=post.id,
        title=post.title,
        content=post.content,
        excerpt=post.excerpt,
        slug=post.slug,
        status=post.status,
        view_count=post.view_count,
        author=store.users.get(post.author_id),
        tags=tags,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def comment_view(store: DataStore, comment: Comment) -> CommentView:
    return CommentView(
        id=comment.id,
        content=comment.content,
        post_id=comment.post_id,
        parent_comment_id=comment.parent_comment_id,
        is_deleted=comment.is_deleted,
        author=store.users.get(comment.author_id),
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


def like_view(store: DataStore, like: Like) -> LikeView:
    return LikeView(
        id=like.id,
        target_type=like.target_type,
        target_id=like.target_id,
        user=store.users.get(like.user_id),
        created_at=like.created_at,
    )


def follow_view(store: DataStore, follow: Follow) -> FollowView:
    return FollowView(
        id=follow.id,
        follower=store.users.get(follow.follower_id),
        following=store.users.get(follow.following_id),
        created_at=follow.created_at,
    )


def map_page(page: Page[S], build: Callable[[S], T]) -> Page[T]:
    """Return ``page`` with every item passed through ``build``."""
    return Page(
        items=[build(item) for item in page.items],
        total=page.total,
        page=page.page,
        limit=page.limit,
    )
