"""Comment endpoints addressed by comment id."""

from __future__ import annotations

from flask import Blueprint, request

from blogapi.api.deps import build_service, json_response, no_content, require_auth, timing
from blogapi.schemas import CommentSchema, CommentUpdateSchema, LikeToggleSchema
from blogapi.services._shared.base import translating
from blogapi.services.comments import CommentService, CommentUpdateIn
from blogapi.services.social import SocialService

bp = Blueprint("comments", __name__)

comment_schema = CommentSchema()
comment_update_schema = CommentUpdateSchema()
like_toggle_schema = LikeToggleSchema()


@bp.patch("/<comment_id>")
@require_auth
@timing
@translating
def update_comment(comment_id: str):
    payload = comment_update_schema.load(request.get_json(silent=True) or {})
    comment = build_service(CommentService).update_comment(comment_id, CommentUpdateIn(**payload))
    return json_response(comment_schema.dump(comment))


@bp.delete("/<comment_id>")
@require_auth
@timing
@translating
def delete_comment(comment_id: str):
    """Soft-delete a comment; replies keep their parent reference."""

    build_service(CommentService).delete_comment(comment_id)
    return no_content()


@bp.post("/<comment_id>/like")
@require_auth
@timing
@translating
def toggle_like(comment_id: str):
    liked, like = build_service(SocialService).toggle_comment_like(comment_id)
    body = {"liked": liked, "like": like} if liked else {"liked": False}
    return json_response(like_toggle_schema.dump(body))
