"""Tag endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from blogapi.api.deps import build_service, json_response, parse_pagination, timing
from blogapi.schemas import PostSchema, TagFilterSchema, TagSchema, paginated
from blogapi.services._shared.base import translating
from blogapi.services.posts import PostService
from blogapi.services.tags import TagService

bp = Blueprint("tags", __name__)

tag_schema = TagSchema()
tag_filter_schema = TagFilterSchema()
post_schema = PostSchema()


@bp.get("")
@timing
@translating
def list_tags():
    """Return every tag ordered by name (not paginated)."""

    filters = tag_filter_schema.load(request.args)
    tags = build_service(TagService).list_tags(search=filters["search"])
    return json_response(tag_schema.dump(tags, many=True))


@bp.get("/<slug>/posts")
@timing
@translating
def list_tag_posts(slug: str):
    pagination = parse_pagination()
    page = build_service(PostService).list_for_tag(slug, pagination)
    return json_response(paginated(page, post_schema))
