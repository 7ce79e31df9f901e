# blogapi/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, cast

from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from blogapi.services._shared.ports import TokenClaims, TokenProvider

log = logging.getLogger(__name__)


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    Signing key, algorithm, issuer, audience and lifetimes all come from the
    ``JWT_*`` settings of the current app. ``jti`` (uuid4) and ``iat`` are
    added by the library on every token.

    .. note::
       Requires an active Flask app context.
    """

    def issue_access_token(self, user_id: str) -> str:
        return cast(str, create_access_token(identity=str(user_id)))

    def issue_refresh_token(self, user_id: str) -> str:
        return cast(str, create_refresh_token(identity=str(user_id)))

    def verify(self, token: str) -> TokenClaims | None:
        # decode_token checks signature, exp, iss and aud against the app config
        try:
            payload = cast(dict[str, Any], decode_token(token))
        except (PyJWTError, JWTExtendedException) as exc:
            log.debug("jwt.rejected", extra={"event": type(exc).__name__})
            return None
        subject = payload.get("sub")
        token_type = payload.get("type")
        if not isinstance(subject, str) or not isinstance(token_type, str):
            return None
        return TokenClaims(user_id=subject, type=token_type)
