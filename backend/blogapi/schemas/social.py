"""Like and follow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields

from blogapi.schemas.user import UserSchema


class LikeSchema(Schema):
    id = fields.String(required=True)
    targetType = fields.String(attribute="target_type")
    targetId = fields.String(attribute="target_id")
    user = fields.Nested(UserSchema, allow_none=True)
    createdAt = fields.DateTime(attribute="created_at")


class LikeToggleSchema(Schema):
    """``{"liked": false}`` after an unlike, ``{"liked": true, "like": {...}}`` after a like."""

    liked = fields.Boolean(required=True)
    like = fields.Nested(LikeSchema)


class FollowSchema(Schema):
    id = fields.String(required=True)
    follower = fields.Nested(UserSchema, allow_none=True)
    following = fields.Nested(UserSchema, allow_none=True)
    createdAt = fields.DateTime(attribute="created_at")
