"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from blogapi.api.deps import json_response, timing
from blogapi.core.extensions import get_redis, get_store

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application health, the refresh-store backend and collection sizes."""

    backend = str(current_app.config.get("REFRESH_STORE", "memory")).lower()
    refresh_status = "ok"
    if backend == "redis":
        try:
            get_redis().ping()
        except RedisError:  # pragma: no cover - depends on Redis availability
            current_app.logger.exception("healthcheck.redis_error")
            refresh_status = "fail"
    version = current_app.config.get("APP_VERSION", "dev")
    commit = current_app.config.get("APP_COMMIT", "unknown")
    payload = {
        "status": "ok" if refresh_status == "ok" else "degraded",
        "refresh_store": {"backend": backend, "status": refresh_status},
        "version": version,
        "commit": commit,
        "store": get_store().counts(),
    }
    return json_response(payload)
