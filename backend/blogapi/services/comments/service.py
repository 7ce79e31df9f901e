# blogapi/services/comments/service.py
from __future__ import annotations

import logging

from blogapi.models.comment import Comment
from blogapi.repositories.base import Exact, Filter, IsNull, Page, Pagination
from blogapi.services._shared.base import BaseService
from blogapi.services._shared.errors import NotFoundError, ValidationError
from blogapi.services._shared.views import CommentView, comment_view, map_page
from blogapi.services.comments.dto import CommentCreateIn, CommentUpdateIn

log = logging.getLogger(__name__)


class CommentService(BaseService):
    """Comment threads: listing, creation, edits and soft deletion."""

    def list_for_post(
        self, post_id: str, pagination: Pagination, *, parent_only: bool = False
    ) -> Page[CommentView]:
        """Oldest-first, non-deleted comments of a post; ``parent_only`` keeps thread roots."""
        filters: list[Filter] = [Exact("post_id", post_id), Exact("is_deleted", False)]
        if parent_only:
            filters.append(IsNull("parent_comment_id"))
        with self.store.transaction():
            page = self.store.comments.paginate(filters, pagination, default_sort=("created_at",))
            return map_page(page, lambda comment: comment_view(self.store, comment))

    def list_for_author(self, author_id: str, pagination: Pagination) -> Page[CommentView]:
        filters: list[Filter] = [Exact("author_id", author_id), Exact("is_deleted", False)]
        with self.store.transaction():
            page = self.store.comments.paginate(filters, pagination)
            return map_page(page, lambda comment: comment_view(self.store, comment))

    def create_comment(self, post_id: str, dto: CommentCreateIn) -> CommentView:
        """
        Add a comment to a post as the caller.

        :raises AuthenticationError: No authenticated caller.
        :raises NotFoundError: Unknown post.
        :raises ValidationError: ``content`` missing.
        """
        actor = self.require_actor()
        with self.store.transaction():
            post = self.store.posts.get(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)
            if not dto.content:
                raise ValidationError("Content is required")

            parent_id = None
            if dto.parent_comment_id:
                parent = self.store.comments.get(dto.parent_comment_id)
                if parent is not None:
                    parent_id = parent.id

            comment = Comment(
                content=dto.content,
                author_id=actor.id,
                post_id=post.id,
                parent_comment_id=parent_id,
            )
            self.store.comments.add(comment)
            return comment_view(self.store, comment)

    def update_comment(self, comment_id: str, dto: CommentUpdateIn) -> CommentView:
        """
        Replace the content of a comment.

        Ownership is checked before the payload, so a stranger gets 403 even
        with an empty body.
        """
        self.require_actor()
        with self.store.transaction():
            comment = self._load(comment_id)
            self.ensure_can_mutate(comment.author_id)
            if not dto.content:
                raise ValidationError("Content is required")
            self.store.comments.update(comment, content=dto.content)
            return comment_view(self.store, comment)

    def delete_comment(self, comment_id: str) -> None:
        """Soft delete: the record and its replies stay, the content becomes ``[deleted]``."""
        actor = self.require_actor()
        with self.store.transaction():
            comment = self._load(comment_id)
            self.ensure_can_mutate(comment.author_id)
            comment.soft_delete()
            log.info("comment.deleted", extra={"event": "comment_deleted", "user_id": actor.id})

    def _load(self, comment_id: str) -> Comment:
        comment = self.store.comments.get(comment_id)
        if comment is None:
            raise NotFoundError("Comment", comment_id)
        return comment
