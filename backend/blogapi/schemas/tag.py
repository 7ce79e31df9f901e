"""Tag schemas."""

from __future__ import annotations

from marshmallow import Schema, fields

from blogapi.schemas.common import QueryFilterSchema


class TagFilterSchema(QueryFilterSchema):
    search = fields.String(load_default=None)


class TagSchema(Schema):
    id = fields.String(required=True)
    name = fields.String(required=True)
    slug = fields.String(required=True)
    description = fields.String(allow_none=True)
    color = fields.String()
    createdAt = fields.DateTime(attribute="created_at")
