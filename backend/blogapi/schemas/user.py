"""User resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields

from blogapi.schemas.common import QueryFilterSchema


class UserFilterSchema(QueryFilterSchema):
    """Supported query parameters for listing users."""

    search = fields.String(load_default=None)


class UserPostsQuerySchema(QueryFilterSchema):
    status = fields.String(load_default=None)


class UserSchema(Schema):
    """Public representation of a user; password data is never dumped."""

    id = fields.String(required=True)
    username = fields.String(required=True)
    email = fields.String(required=True)
    firstName = fields.String(attribute="first_name")
    lastName = fields.String(attribute="last_name")
    bio = fields.String(allow_none=True)
    avatarUrl = fields.String(attribute="avatar_url", allow_none=True)
    role = fields.String(required=True)
    isActive = fields.Boolean(attribute="is_active")
    createdAt = fields.DateTime(attribute="created_at")
    updatedAt = fields.DateTime(attribute="updated_at")
