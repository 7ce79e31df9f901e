# blogapi/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from blogapi.models.user import User

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param identifier: Username or email.
    :type identifier: str | None
    :param password: Raw password (to be verified).
    :type password: str | None
    """

    identifier: str | None
    password: str | None


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str | None
    """

    refresh_token: str | None


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param refresh_token: Refresh token whose record should be revoked.
    :type refresh_token: str | None
    """

    refresh_token: str | None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :param refresh_token: Encoded refresh JWT.
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    """Authenticated user (password never serialized) plus a fresh token pair."""

    user: User
    access_token: str
    refresh_token: str


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    The access-token lifetime is read by flask-jwt-extended from
    ``JWT_ACCESS_TOKEN_EXPIRES``; only the refresh lifetime is needed here to
    stamp the persisted record.

    :param refresh_expires: Refresh token lifetime, also used for the record expiry.
    """

    refresh_expires: timedelta = timedelta(days=7)
