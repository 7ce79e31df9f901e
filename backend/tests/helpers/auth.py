"""Authentication helpers for tests."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from flask_jwt_extended import create_access_token, create_refresh_token


def issue_token(identity: str, expires_delta: timedelta | None = None) -> str:
    """Generate an access JWT for ``identity``.

    Parameters
    ----------
    identity:
        Subject identifier to encode in the token.
    expires_delta:
        Optional expiry delta. If ``None``, the default expiry is used.

    Returns
    -------
    str
        Encoded JWT string.
    """

    return create_access_token(identity=identity, expires_delta=expires_delta)


def expired_token(identity: str) -> str:
    """Return an already expired access JWT for ``identity``."""

    return create_access_token(identity=identity, expires_delta=timedelta(seconds=-1))


def refresh_jwt(identity: str) -> str:
    """Return a refresh JWT that has no stored record."""

    return create_refresh_token(identity=identity)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def login(client: Any, identifier: str, password: str) -> dict[str, Any]:
    """Log in through the API and return the JSON body (asserting 200)."""

    resp = client.post("/api/auth/login", json={"identifier": identifier, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()
