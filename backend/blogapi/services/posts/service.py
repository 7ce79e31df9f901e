# blogapi/services/posts/service.py
from __future__ import annotations

import logging

from blogapi.models.post import Post, PostStatus, default_excerpt, slugify
from blogapi.repositories.base import Contains, Exact, Filter, Page, Pagination, RelatedEquals
from blogapi.services._shared.base import BaseService
from blogapi.services._shared.errors import NotFoundError, ValidationError
from blogapi.services._shared.views import PostView, map_page, post_view
from blogapi.services.posts.dto import PostCreateIn, PostListIn, PostStatsOut, PostUpdateIn

log = logging.getLogger(__name__)

SORT_FIELDS = {"createdAt", "title", "viewCount", "updatedAt"}


def _status(value: str) -> PostStatus:
    try:
        return PostStatus(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown post status: {value}") from exc


class PostService(BaseService):
    """Post use cases: listing, reads with view counting, CRUD and stats."""

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def list_posts(self, query: PostListIn, pagination: Pagination) -> Page[PostView]:
        """
        Page through posts, published ones unless ``query.status`` says otherwise.

        Unknown sort keys fall back to ``createdAt``; ``order`` other than
        ``asc`` means descending.
        """
        filters: list[Filter] = [Exact("status", query.status or PostStatus.PUBLISHED)]
        if query.tag:
            filters.append(RelatedEquals("tag_ids", "name", query.tag))
        if query.author:
            filters.append(RelatedEquals("author_id", "username", query.author))
        if query.search:
            filters.append(Contains("title", query.search))

        sort_key = query.sort if query.sort in SORT_FIELDS else "createdAt"
        token = sort_key if query.order == "asc" else f"-{sort_key}"
        pagination = self.ensure_pagination(
            page=pagination.page, limit=pagination.limit, sort=[token]
        )
        with self.store.transaction():
            page = self.store.posts.paginate(filters, pagination)
            return map_page(page, lambda post: post_view(self.store, post))

    def list_for_author(
        self, author_id: str, pagination: Pagination, *, status: str | None = None
    ) -> Page[PostView]:
        filters: list[Filter] = [Exact("author_id", author_id)]
        if status:
            filters.append(Exact("status", status))
        with self.store.transaction():
            page = self.store.posts.paginate(filters, pagination)
            return map_page(page, lambda post: post_view(self.store, post))

    def list_for_tag(self, slug: str, pagination: Pagination) -> Page[PostView]:
        """Published posts carrying the tag ``slug``; an unknown slug yields an empty page."""
        filters: list[Filter] = [
            RelatedEquals("tag_ids", "slug", slug),
            Exact("status", PostStatus.PUBLISHED),
        ]
        with self.store.transaction():
            page = self.store.posts.paginate(filters, pagination)
            return map_page(page, lambda post: post_view(self.store, post))

    def get_post(self, post_id: str) -> PostView:
        """Return a post and count the read in ``view_count``."""
        with self.store.transaction():
            post = self._load(post_id)
            self.store.posts.increment_views(post)
            return post_view(self.store, post)

    def get_post_by_slug(self, slug: str) -> PostView:
        with self.store.transaction():
            post = self.store.posts.get_by_slug(slug)
            if post is None:
                raise NotFoundError("Post", slug)
            self.store.posts.increment_views(post)
            return post_view(self.store, post)

    def stats(self, post_id: str) -> PostStatsOut:
        """Like count, non-deleted comment count and views of a post."""
        with self.store.transaction():
            post = self._load(post_id)
            likes = self.store.likes.count(
                [Exact("target_type", "post"), Exact("target_id", post.id)]
            )
            comments = self.store.comments.count(
                [Exact("post_id", post.id), Exact("is_deleted", False)]
            )
            return PostStatsOut(
                post_id=post.id, likes=likes, comments=comments, views=post.view_count
            )

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def create_post(self, dto: PostCreateIn) -> PostView:
        """
        Create a post authored by the caller.

        :raises AuthenticationError: No authenticated caller.
        :raises ValidationError: ``title`` or ``content`` missing.
        """
        actor = self.require_actor()
        if not dto.title or not dto.content:
            raise ValidationError("Title and content are required")

        with self.store.transaction():
            post = Post(
                title=dto.title,
                content=dto.content,
                excerpt=dto.excerpt or default_excerpt(dto.content),
                slug=slugify(dto.title),
                status=_status(dto.status or PostStatus.DRAFT),
                author_id=actor.id,
                tag_ids=self.store.tags.existing_ids(list(dto.tag_ids)),
            )
            self.store.posts.add(post)
            log.info("post.created", extra={"event": "post_created", "user_id": actor.id})
            return post_view(self.store, post)

    def update_post(self, post_id: str, dto: PostUpdateIn) -> PostView:
        """
        Apply a partial update; a new title regenerates the slug.

        :raises AuthenticationError: No authenticated caller.
        :raises NotFoundError: Unknown post.
        :raises AuthorizationError: Caller is neither the author nor an admin.
        """
        self.require_actor()
        with self.store.transaction():
            post = self._load(post_id)
            self.ensure_can_mutate(post.author_id)

            changes: dict[str, object] = {}
            if dto.title:
                changes["title"] = dto.title
                changes["slug"] = slugify(dto.title)
            if dto.content:
                changes["content"] = dto.content
            if dto.excerpt:
                changes["excerpt"] = dto.excerpt
            if dto.status:
                changes["status"] = _status(dto.status)
            if dto.tag_ids is not None:
                changes["tag_ids"] = self.store.tags.existing_ids(list(dto.tag_ids))

            self.store.posts.update(post, **changes)
            return post_view(self.store, post)

    def delete_post(self, post_id: str) -> None:
        """
        Hard-delete a post together with its comments and every like on the
        post or on those comments.
        """
        actor = self.require_actor()
        with self.store.transaction():
            post = self._load(post_id)
            self.ensure_can_mutate(post.author_id)

            comment_ids = [c.id for c in self.store.comments.find([Exact("post_id", post.id)])]
            self.store.likes.delete_where(
                [Exact("target_type", "post"), Exact("target_id", post.id)]
            )
            for comment_id in comment_ids:
                self.store.likes.delete_where(
                    [Exact("target_type", "comment"), Exact("target_id", comment_id)]
                )
            self.store.comments.delete_where([Exact("post_id", post.id)])
            self.store.posts.delete(post.id)
            log.info("post.deleted", extra={"event": "post_deleted", "user_id": actor.id})

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _load(self, post_id: str) -> Post:
        post = self.store.posts.get(post_id)
        if post is None:
            raise NotFoundError("Post", post_id)
        return post
