"""
blogapi.services._shared.ports
==============================

*Ports* (hexagonal interfaces) for token management and refresh-token
persistence. They decouple the auth service from the concrete adapters under
``blogapi.infra`` (flask-jwt-extended, Redis).

Modules
-------
- :mod:`token_provider`:
    :class:`~.TokenProvider` issues and verifies signed tokens.
- :mod:`refresh_token_store`:
    :class:`~.RefreshTokenStore` persists refresh-token records with atomic
    rotation and bulk revocation.
"""

from __future__ import annotations

from .refresh_token_store import InMemoryRefreshTokenStore, RefreshTokenStore
from .token_provider import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    StubTokenProvider,
    TokenClaims,
    TokenProvider,
)

__all__ = [
    "ACCESS_TOKEN_TYPE",
    "REFRESH_TOKEN_TYPE",
    "InMemoryRefreshTokenStore",
    "RefreshTokenStore",
    "StubTokenProvider",
    "TokenClaims",
    "TokenProvider",
]
