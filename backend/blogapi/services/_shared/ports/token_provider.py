from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Verified subset of a token's claims.

    :ivar user_id: ``sub`` claim.
    :ivar type: ``"access"`` or ``"refresh"``.
    """

    user_id: str
    type: str


class TokenProvider(Protocol):
    """Port for issuing and verifying signed tokens."""

    def issue_access_token(self, user_id: str) -> str: ...

    def issue_refresh_token(self, user_id: str) -> str: ...

    def verify(self, token: str) -> TokenClaims | None:
        """Return the claims of a valid token, ``None`` for anything else. Never raises."""
        ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests."""

    def __init__(
        self,
        *,
        access_expires: timedelta = timedelta(minutes=15),
        refresh_expires: timedelta = timedelta(days=7),
    ) -> None:
        self.access_expires = access_expires
        self.refresh_expires = refresh_expires
        self.fail_issuing = False
        self._seq = 0
        self._issued: dict[str, tuple[TokenClaims, datetime]] = {}

    def _mk(self, user_id: str, ttype: str, exp_delta: timedelta) -> str:
        if self.fail_issuing:
            raise RuntimeError("signing key unavailable")
        self._seq += 1
        token = f"{ttype}.{user_id}.{self._seq}"
        self._issued[token] = (
            TokenClaims(user_id=user_id, type=ttype),
            datetime.now(UTC) + exp_delta,
        )
        return token

    def issue_access_token(self, user_id: str) -> str:
        return self._mk(user_id, ACCESS_TOKEN_TYPE, self.access_expires)

    def issue_refresh_token(self, user_id: str) -> str:
        return self._mk(user_id, REFRESH_TOKEN_TYPE, self.refresh_expires)

    def verify(self, token: str) -> TokenClaims | None:
        entry = self._issued.get(token)
        if entry is None:
            return None
        claims, expires_at = entry
        if expires_at <= datetime.now(UTC):
            return None
        return claims
