# blogapi/services/auth/service.py
from __future__ import annotations

import logging
from datetime import UTC, datetime

from blogapi.models.refresh_token import RefreshToken
from blogapi.models.user import User
from blogapi.repositories.store import DataStore
from blogapi.services._shared.base import BaseService, ServiceContext
from blogapi.services._shared.errors import (
    AuthenticationError,
    InactiveAccountError,
    TokenIssueError,
    ValidationError,
)
from blogapi.services._shared.ports.refresh_token_store import RefreshTokenStore
from blogapi.services._shared.ports.token_provider import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    TokenProvider,
)
from blogapi.services.auth.dto import (
    AuthTokenConfig,
    LoginIn,
    LoginOut,
    LogoutIn,
    RefreshIn,
    TokenPairOut,
)

log = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class AuthService(BaseService):
    """
    Authentication lifecycle service (login / refresh / logout / logout-all).

    Tokens are issued and verified through a pluggable :class:`TokenProvider`;
    every refresh token is mirrored by a record in the
    :class:`RefreshTokenStore`, which makes refresh tokens single-use
    (rotation) and revocable.
    """

    def __init__(
        self,
        store: DataStore,
        *,
        token_provider: TokenProvider,
        refresh_store: RefreshTokenStore,
        token_cfg: AuthTokenConfig | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param store: Data store holding user records.
        :param token_provider: Adapter for issuing/verifying JWTs.
        :param refresh_store: Stateful store for refresh-token records.
        :param token_cfg: Access/Refresh expiry configuration.
        """
        super().__init__(store, ctx=ctx)
        self.tokens = token_provider
        self.refresh_store = refresh_store
        self.cfg = token_cfg or AuthTokenConfig()

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate credentials and issue a fresh token pair.

        The identifier is tried as a username first, then as an email. The
        password is checked before the active flag, so an inactive account
        only reveals itself to a caller who knows its password.

        :param dto: Login input.
        :returns: The user plus an access/refresh token pair.
        :raises ValidationError: Password or identifier missing.
        :raises AuthenticationError: Unknown user or wrong password.
        :raises InactiveAccountError: Correct credentials, inactive account.
        :raises TokenIssueError: Token signing failed.
        """
        if not dto.password:
            raise ValidationError("Password is required")
        if not dto.identifier:
            raise ValidationError("Username or email is required")

        user = self.store.users.get_by_identifier(dto.identifier)
        if user is None:
            log.warning("auth.login_failed", extra={"event": "login_failed"})
            raise AuthenticationError("Invalid credentials")
        if not user.verify_password(dto.password):
            log.warning("auth.login_failed", extra={"event": "login_failed", "user_id": user.id})
            raise AuthenticationError("Invalid credentials")
        if not user.is_active:
            raise InactiveAccountError()

        pair = self._issue_pair(user.id, failure_message="Failed to generate tokens")
        self.refresh_store.add(self._new_record(user.id, pair.refresh_token))
        log.info("auth.login", extra={"event": "login", "user_id": user.id})
        return LoginOut(user=user, access_token=pair.access_token, refresh_token=pair.refresh_token)

    # ------------------------------------------------------------------ #
    # Refresh with atomic rotation
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Rotate a refresh token and emit a new token pair.

        Checks run in this order: persisted record (non-revoked, exact match),
        record expiry, JWT signature and type, owning user. The new record is
        stored and the old one revoked in a single atomic store call, so a
        refresh token can be exchanged at most once.
        """
        old_token = dto.refresh_token
        if not old_token:
            raise ValidationError("Refresh token is required")

        record = self.refresh_store.get(old_token)
        if record is None or record.is_revoked:
            raise AuthenticationError("Invalid or revoked refresh token")

        if record.is_expired(self.now_utc()):
            self.refresh_store.revoke(old_token)
            log.info(
                "auth.refresh_expired",
                extra={"event": "refresh_expired", "user_id": record.user_id},
            )
            raise AuthenticationError("Refresh token expired")

        claims = self.tokens.verify(old_token)
        if claims is None or claims.type != REFRESH_TOKEN_TYPE:
            raise AuthenticationError("Invalid JWT refresh token type")

        user = self.store.users.get(claims.user_id)
        if user is None or not user.is_active:
            raise AuthenticationError("User not found or inactive for refresh token")

        pair = self._issue_pair(user.id, failure_message="Failed to generate new access token")
        if not self.refresh_store.rotate(old_token, self._new_record(user.id, pair.refresh_token)):
            # A concurrent refresh consumed the token between the lookup and the swap
            raise AuthenticationError("Invalid or revoked refresh token")

        log.info("auth.refresh", extra={"event": "refresh", "user_id": user.id})
        return pair

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Revoke the record of the given refresh token.

        Unknown or already revoked tokens are accepted silently, so logout is
        idempotent.
        """
        if not dto.refresh_token:
            raise ValidationError("Refresh token is required for logout")
        if self.refresh_store.revoke(dto.refresh_token):
            log.info("auth.logout", extra={"event": "logout"})

    def logout_all(self) -> int:
        """
        Revoke every active refresh token of the authenticated caller.

        :returns: Number of records revoked.
        :raises AuthenticationError: No authenticated caller.
        """
        user = self.require_actor()
        count = self.refresh_store.revoke_all_for_user(user.id)
        log.info(
            "auth.logout_all",
            extra={"event": "logout_all", "user_id": user.id, "count": count},
        )
        return count

    # ------------------------------------------------------------------ #
    # Bearer resolution
    # ------------------------------------------------------------------ #

    def resolve_current_user(self, authorization: str | None) -> User | None:
        """
        Map an ``Authorization`` header to a user.

        Returns ``None`` when the header is absent or not ``Bearer <token>``,
        when the token fails verification or is not an access token, or when
        the user no longer exists. Never raises.
        """
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            return None
        token = authorization[len(BEARER_PREFIX) :].strip()
        if not token:
            return None
        claims = self.tokens.verify(token)
        if claims is None or claims.type != ACCESS_TOKEN_TYPE:
            return None
        return self.store.users.get(claims.user_id)

    def verify(self, authorization: str | None) -> User:
        """
        Return the user behind a bearer token.

        :raises AuthenticationError: ``"Token is invalid or expired"`` for any failure.
        """
        user = self.resolve_current_user(authorization)
        if user is None:
            raise AuthenticationError("Token is invalid or expired")
        return user

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def _issue_pair(self, user_id: str, *, failure_message: str) -> TokenPairOut:
        try:
            access = self.tokens.issue_access_token(user_id)
            refresh = self.tokens.issue_refresh_token(user_id)
        except Exception as exc:
            log.exception("auth.token_issue_failed", extra={"user_id": user_id})
            raise TokenIssueError(failure_message) from exc
        return TokenPairOut(access_token=access, refresh_token=refresh)

    def _new_record(self, user_id: str, token: str) -> RefreshToken:
        now = self.now_utc()
        return RefreshToken(
            token=token,
            user_id=user_id,
            expires_at=now + self.cfg.refresh_expires,
            created_at=now,
        )

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(UTC)
