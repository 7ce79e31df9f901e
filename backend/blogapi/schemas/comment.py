"""Comment schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields

from blogapi.schemas.common import QueryFilterSchema
from blogapi.schemas.user import UserSchema


class CommentCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    content = fields.String(load_default=None, allow_none=True)
    parent_comment_id = fields.String(
        data_key="parentCommentId", load_default=None, allow_none=True
    )


class CommentUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    content = fields.String(load_default=None, allow_none=True)


class CommentListQuerySchema(QueryFilterSchema):
    parent_only = fields.Boolean(load_default=False)


class CommentSchema(Schema):
    """Comment view; ``parentCommentId`` is an id reference, never a nested object."""

    id = fields.String(required=True)
    content = fields.String(required=True)
    postId = fields.String(attribute="post_id")
    parentCommentId = fields.String(attribute="parent_comment_id", allow_none=True)
    isDeleted = fields.Boolean(attribute="is_deleted")
    author = fields.Nested(UserSchema, allow_none=True)
    createdAt = fields.DateTime(attribute="created_at")
    updatedAt = fields.DateTime(attribute="updated_at")
