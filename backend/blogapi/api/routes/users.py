"""User, profile and follow endpoints."""

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
    CommentSchema,
    FollowSchema,
    PostSchema,
    UserFilterSchema,
    UserPostsQuerySchema,
    UserSchema,
    paginated,
)
from blogapi.services._shared.base import translating
from blogapi.services.comments import CommentService
from blogapi.services.posts import PostService
from blogapi.services.social import SocialService
from blogapi.services.users import UserService

bp = Blueprint("users", __name__)

user_schema = UserSchema()
user_filter_schema = UserFilterSchema()
user_posts_query_schema = UserPostsQuerySchema()
post_schema = PostSchema()
comment_schema = CommentSchema()
follow_schema = FollowSchema()


@bp.get("/me")
@require_auth
@timing
@translating
def me():
    """Return the authenticated user profile."""

    user = build_service(UserService).me()
    return json_response(user_schema.dump(user))


@bp.get("/users")
@timing
@translating
def list_users():
    """Return paginated users, newest first."""

    filters = user_filter_schema.load(request.args)
    pagination = parse_pagination()
    page = build_service(UserService).list_users(pagination, search=filters["search"])
    return json_response(paginated(page, user_schema))


@bp.get("/users/<user_id>")
@timing
@translating
def get_user(user_id: str):
    user = build_service(UserService).get_user(user_id)
    return json_response(user_schema.dump(user))


@bp.get("/users/<user_id>/posts")
@timing
@translating
def list_user_posts(user_id: str):
    """Return the user's posts, optionally narrowed by ``status``."""

    query = user_posts_query_schema.load(request.args)
    pagination = parse_pagination()
    page = build_service(PostService).list_for_author(user_id, pagination, status=query["status"])
    return json_response(paginated(page, post_schema))


@bp.get("/users/<user_id>/comments")
@timing
@translating
def list_user_comments(user_id: str):
    pagination = parse_pagination()
    page = build_service(CommentService).list_for_author(user_id, pagination)
    return json_response(paginated(page, comment_schema))


@bp.post("/users/<user_id>/follow")
@require_auth
@timing
@translating
def follow(user_id: str):
    follow_view = build_service(SocialService).follow(user_id)
    return json_response(follow_schema.dump(follow_view), status=201)


@bp.delete("/users/<user_id>/follow")
@require_auth
@timing
@translating
def unfollow(user_id: str):
    build_service(SocialService).unfollow(user_id)
    return no_content()
