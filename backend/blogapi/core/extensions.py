"""Flask extension instances and per-app stores.

The data store and the refresh-token store live in ``app.extensions`` so
every application instance (one per test, typically) owns its own state.
"""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from blogapi.repositories.store import DataStore
from blogapi.services._shared.ports import InMemoryRefreshTokenStore, RefreshTokenStore

STORE_KEY = "blogapi.store"
REFRESH_STORE_KEY = "blogapi.refresh_store"
REDIS_KEY = "redis_client"

jwt = JWTManager()


def init_app(app: Flask) -> None:
    """Initialize JWT, the data store and the refresh-token store.

    Parameters
    ----------
    app: flask.Flask
        Application receiving the extensions. ``REFRESH_STORE`` selects the
        refresh-token backend (``"memory"`` or ``"redis"``); the Redis
        backend requires ``REDIS_URL``.

    Raises
    ------
    RuntimeError
        When Redis is selected but unreachable or not configured.
    """
    jwt.init_app(app)

    app.extensions[STORE_KEY] = DataStore()
    app.extensions[REFRESH_STORE_KEY] = _build_refresh_store(app)


def _build_refresh_store(app: Flask) -> RefreshTokenStore:
    backend = str(app.config.get("REFRESH_STORE", "memory")).lower()
    if backend == "memory":
        app.extensions.pop(REDIS_KEY, None)
        return InMemoryRefreshTokenStore()
    if backend != "redis":
        raise RuntimeError(f"Unknown REFRESH_STORE backend {backend!r}")

    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        raise RuntimeError("REFRESH_STORE=redis requires REDIS_URL")
    client = redis.Redis.from_url(redis_url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    app.extensions[REDIS_KEY] = client

    from blogapi.infra.redis.redis_refresh_token_store import RedisRefreshTokenStore

    return RedisRefreshTokenStore(client)


def get_store() -> DataStore:
    """Return the data store of the current application."""
    return current_app.extensions[STORE_KEY]


def get_refresh_store() -> RefreshTokenStore:
    return current_app.extensions[REFRESH_STORE_KEY]


def get_redis() -> redis.Redis:
    """Return the Redis client of the current application."""
    client = current_app.extensions.get(REDIS_KEY)
    if client is None:
        raise RuntimeError("Redis client is not initialized. Set REFRESH_STORE=redis.")
    return client
