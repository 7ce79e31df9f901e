"""Post endpoints, including post comments, likes and stats."""

from __future__ import annotations

from flask import Blueprint, request

from blogapi.api.deps import (
    build_service,
    json_response,
    no_content,
    parse_pagination,
    require_auth,
    timing,
)
from blogapi.schemas import (
    CommentCreateSchema,
    CommentListQuerySchema,
    CommentSchema,
    LikeToggleSchema,
    PostCreateSchema,
    PostListQuerySchema,
    PostSchema,
    PostStatsSchema,
    PostUpdateSchema,
    paginated,
)
from blogapi.services._shared.base import translating
from blogapi.services.comments import CommentCreateIn, CommentService
from blogapi.services.posts import PostCreateIn, PostListIn, PostService, PostUpdateIn
from blogapi.services.social import SocialService

bp = Blueprint("posts", __name__)

post_schema = PostSchema()
post_create_schema = PostCreateSchema()
post_update_schema = PostUpdateSchema()
post_list_query_schema = PostListQuerySchema()
post_stats_schema = PostStatsSchema()
comment_schema = CommentSchema()
comment_create_schema = CommentCreateSchema()
comment_list_query_schema = CommentListQuerySchema()
like_toggle_schema = LikeToggleSchema()


@bp.get("")
@timing
@translating
def list_posts():
    """Return paginated posts (published unless ``status`` says otherwise)."""

    query = post_list_query_schema.load(request.args)
    pagination = parse_pagination()
    page = build_service(PostService).list_posts(PostListIn(**query), pagination)
    return json_response(paginated(page, post_schema))


@bp.post("")
@require_auth
@timing
@translating
def create_post():
    payload = post_create_schema.load(request.get_json(silent=True) or {})
    post = build_service(PostService).create_post(PostCreateIn(**payload))
    return json_response(post_schema.dump(post), status=201)


@bp.get("/slug/<slug>")
@timing
@translating
def get_post_by_slug(slug: str):
    post = build_service(PostService).get_post_by_slug(slug)
    return json_response(post_schema.dump(post))


@bp.get("/<post_id>")
@timing
@translating
def get_post(post_id: str):
    """Return a post; every read counts as a view."""

    post = build_service(PostService).get_post(post_id)
    return json_response(post_schema.dump(post))


@bp.patch("/<post_id>")
@require_auth
@timing
@translating
def update_post(post_id: str):
    payload = post_update_schema.load(request.get_json(silent=True) or {})
    post = build_service(PostService).update_post(post_id, PostUpdateIn(**payload))
    return json_response(post_schema.dump(post))


@bp.delete("/<post_id>")
@require_auth
@timing
@translating
def delete_post(post_id: str):
    build_service(PostService).delete_post(post_id)
    return no_content()


@bp.get("/<post_id>/stats")
@timing
@translating
def post_stats(post_id: str):
    stats = build_service(PostService).stats(post_id)
    return json_response(post_stats_schema.dump(stats))


@bp.post("/<post_id>/like")
@require_auth
@timing
@translating
def toggle_like(post_id: str):
    liked, like = build_service(SocialService).toggle_post_like(post_id)
    body = {"liked": liked, "like": like} if liked else {"liked": False}
    return json_response(like_toggle_schema.dump(body))


@bp.get("/<post_id>/comments")
@timing
@translating
def list_comments(post_id: str):
    """Return the post's comments, oldest first."""

    query = comment_list_query_schema.load(request.args)
    pagination = parse_pagination()
    page = build_service(CommentService).list_for_post(
        post_id, pagination, parent_only=query["parent_only"]
    )
    return json_response(paginated(page, comment_schema))


@bp.post("/<post_id>/comments")
@require_auth
@timing
@translating
def create_comment(post_id: str):
    payload = comment_create_schema.load(request.get_json(silent=True) or {})
    comment = build_service(CommentService).create_comment(post_id, CommentCreateIn(**payload))
    return json_response(comment_schema.dump(comment), status=201)
