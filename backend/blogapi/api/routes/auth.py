"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, request

from blogapi.api.deps import (
    auth_service,
    json_response,
    no_content,
    require_auth,
    service_context,
    timing,
)
from blogapi.schemas import (
    LoginResponseSchema,
    LoginSchema,
    LogoutSchema,
    RefreshSchema,
    TokenPairSchema,
    VerifyResponseSchema,
)
from blogapi.services._shared.base import translating
from blogapi.services.auth import LoginIn, LogoutIn, RefreshIn

bp = Blueprint("auth", __name__)

login_schema = LoginSchema()
refresh_schema = RefreshSchema()
logout_schema = LogoutSchema()
login_response_schema = LoginResponseSchema()
token_pair_schema = TokenPairSchema()
verify_schema = VerifyResponseSchema()


@bp.post("/login")
@timing
@translating
def login():
    """Authenticate credentials and issue an access/refresh token pair."""

    data = login_schema.load(request.get_json(silent=True) or {})
    result = auth_service().login(LoginIn(**data))
    return json_response(login_response_schema.dump(result))


@bp.post("/refresh")
@timing
@translating
def refresh():
    """Exchange a refresh token for a new pair; the old token stops working."""

    data = refresh_schema.load(request.get_json(silent=True) or {})
    pair = auth_service().refresh(RefreshIn(**data))
    return json_response(token_pair_schema.dump(pair))


@bp.post("/logout")
@timing
@translating
def logout():
    """Revoke the refresh token given in the body."""

    data = logout_schema.load(request.get_json(silent=True) or {})
    auth_service().logout(LogoutIn(**data))
    return no_content()


@bp.post("/logout-all")
@require_auth
@timing
@translating
def logout_all():
    """Revoke every refresh token of the caller."""

    auth_service(service_context()).logout_all()
    return no_content()


@bp.get("/verify")
@timing
@translating
def verify():
    user = auth_service().verify(request.headers.get("Authorization"))
    return json_response(verify_schema.dump({"message": "Token is valid", "user": user}))
