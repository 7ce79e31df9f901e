"""Post resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from blogapi.models.post import PostStatus
from blogapi.schemas.common import QueryFilterSchema
from blogapi.schemas.tag import TagSchema
from blogapi.schemas.user import UserSchema

_STATUSES = [status.value for status in PostStatus]


class PostCreateSchema(Schema):
    """Payload for creating a post; presence of title/content is checked by the service."""

    class Meta:
        unknown = EXCLUDE

    title = fields.String(load_default=None, allow_none=True)
    content = fields.String(load_default=None, allow_none=True)
    excerpt = fields.String(load_default=None, allow_none=True)
    status = fields.String(load_default=None, allow_none=True, validate=validate.OneOf(_STATUSES))
    tag_ids = fields.List(fields.String(), data_key="tagIds", load_default=list)


class PostUpdateSchema(Schema):
    """Partial update; omitted keys leave the post untouched."""

    class Meta:
        unknown = EXCLUDE

    title = fields.String(allow_none=True)
    content = fields.String(allow_none=True)
    excerpt = fields.String(allow_none=True)
    status = fields.String(allow_none=True, validate=validate.OneOf(_STATUSES))
    tag_ids = fields.List(fields.String(), data_key="tagIds")


class PostListQuerySchema(QueryFilterSchema):
    """Filters and ordering accepted by ``GET /posts``.

    ``status`` is matched as given, so an unknown value yields an empty page;
    ``order`` other than ``asc`` sorts descending.
    """

    tag = fields.String(load_default=None)
    author = fields.String(load_default=None)
    status = fields.String(load_default=None)
    search = fields.String(load_default=None)
    # Unknown sort keys fall back to createdAt in the service
    sort = fields.String(load_default="createdAt")
    order = fields.String(load_default="desc")


class PostSchema(Schema):
    """Public representation of a post view with nested author and tags."""

    id = fields.String(required=True)
    title = fields.String(required=True)
    content = fields.String(required=True)
    excerpt = fields.String()
    slug = fields.String()
    status = fields.String()
    viewCount = fields.Integer(attribute="view_count")
    author = fields.Nested(UserSchema, allow_none=True)
    tags = fields.List(fields.Nested(TagSchema))
    createdAt = fields.DateTime(attribute="created_at")
    updatedAt = fields.DateTime(attribute="updated_at")


class PostStatsSchema(Schema):
    postId = fields.String(attribute="post_id")
    likes = fields.Integer()
    comments = fields.Integer()
    views = fields.Integer()
