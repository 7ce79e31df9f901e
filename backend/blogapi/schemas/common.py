"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, pre_load, validate

from blogapi.repositories.base import Page


class PaginationQuerySchema(Schema):
    """Validate ``page``/``limit`` with configurable defaults.

    Non-integer values fail validation (400); ``limit`` above the maximum is
    clamped rather than rejected.
    """

    class Meta:
        unknown = EXCLUDE

    def __init__(self, *, default_limit: int = 10, max_limit: int = 100, **kwargs: Any) -> None:
        self._default_limit = default_limit
        self._max_limit = max_limit
        super().__init__(**kwargs)

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(validate=validate.Range(min=1))

    @post_load
    def apply_defaults(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        limit = data.get("limit", self._default_limit)
        data["limit"] = min(max(limit, 1), self._max_limit)
        data.setdefault("page", 1)
        return data


class QueryFilterSchema(Schema):
    """Base for list filters read from the query string.

    A blank value (``?status=``) counts as an absent filter, so the field
    default applies.
    """

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def drop_blank_values(self, data: Any, **_: Any) -> dict[str, Any]:
        return {key: value for key, value in data.items() if value != ""}


class PaginationMetaSchema(Schema):
    """``pagination`` block of list responses."""

    page = fields.Integer(required=True)
    limit = fields.Integer(required=True)
    totalPages = fields.Integer(attribute="total_pages")
    totalCount = fields.Integer(attribute="total")
    hasNextPage = fields.Boolean(attribute="has_next")
    hasPreviousPage = fields.Boolean(attribute="has_previous")


_meta_schema = PaginationMetaSchema()


def build_pagination(page: Page[Any]) -> dict[str, Any]:
    """Return the ``pagination`` mapping for a result page."""

    return _meta_schema.dump(page)


def paginated(page: Page[Any], item_schema: Schema) -> dict[str, Any]:
    """Return the ``{data, pagination}`` envelope for ``page``."""

    return {"data": item_schema.dump(page.items, many=True), "pagination": build_pagination(page)}
