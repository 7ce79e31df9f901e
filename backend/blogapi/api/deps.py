"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request

from blogapi.core.errors import Unauthorized
from blogapi.core.extensions import get_refresh_store, get_store
from blogapi.core.logger import ensure_request_id
from blogapi.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from blogapi.models.user import User
from blogapi.repositories.base import Pagination
from blogapi.schemas.common import PaginationQuerySchema
from blogapi.services._shared.base import BaseService, ServiceContext
from blogapi.services.auth import AuthService, AuthTokenConfig

F = TypeVar("F", bound=Callable[..., Any])
S = TypeVar("S", bound=BaseService)

_UNSET = object()


def parse_pagination() -> Pagination:
    """Parse ``page``/``limit`` from ``request.args`` using the configured bounds."""

    schema = PaginationQuerySchema(
        default_limit=int(current_app.config.get("PAGINATION_DEFAULT_LIMIT", 10)),
        max_limit=int(current_app.config.get("PAGINATION_MAX_LIMIT", 100)),
    )
    data = schema.load(request.args)
    return Pagination(page=data["page"], limit=data["limit"], sort=[])


def auth_service(ctx: ServiceContext | None = None) -> AuthService:
    """Build an :class:`AuthService` bound to the current app's stores and JWT settings."""

    config = current_app.config
    token_cfg = AuthTokenConfig(
        refresh_expires=_as_timedelta(config.get("JWT_REFRESH_TOKEN_EXPIRES"), timedelta(days=7)),
    )
    return AuthService(
        get_store(),
        token_provider=JWTTokenProvider(),
        refresh_store=get_refresh_store(),
        token_cfg=token_cfg,
        ctx=ctx,
    )


def _as_timedelta(value: Any, default: timedelta) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int | float):
        return timedelta(seconds=value)
    return default


def current_user() -> User | None:
    """Resolve the bearer token of the current request once and cache the result."""

    cached = getattr(request, "_blogapi_user", _UNSET)
    if cached is _UNSET:
        cached = auth_service().resolve_current_user(request.headers.get("Authorization"))
        setattr(request, "_blogapi_user", cached)
    return cached  # type: ignore[return-value]


def service_context() -> ServiceContext:
    return ServiceContext(actor=current_user(), request_id=ensure_request_id())


def build_service(service_cls: type[S]) -> S:
    """Instantiate a resource service for the current request."""

    return service_cls(get_store(), ctx=service_context())


def require_auth(func: F) -> F:
    """Reject the request with 401 unless it carries a valid access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        if current_user() is None:
            raise Unauthorized("Unauthorized")
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def no_content() -> Response:
    """Return an empty 204 response."""

    return Response(status=204)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
