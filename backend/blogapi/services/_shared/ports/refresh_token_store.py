from __future__ import annotations

import threading
from typing import Protocol

from blogapi.models.refresh_token import RefreshToken


class RefreshTokenStore(Protocol):
    """
    Stateful store for refresh-token records.

    Records are keyed by the exact token string. Revocation is monotonic.
    :meth:`rotate` and :meth:`revoke_all_for_user` MUST be atomic.
    """

    def add(self, record: RefreshToken) -> None:
        """Persist a brand-new record. Called before the token reaches the client."""

    def get(self, token: str) -> RefreshToken | None:
        """Return the record for ``token`` (revoked or not), if any."""

    def revoke(self, token: str) -> bool:
        """Mark a single record revoked. :returns: True if an active record was revoked."""

    def rotate(self, old_token: str, new_record: RefreshToken) -> bool:
        """
        Atomically revoke ``old_token`` and persist ``new_record``.

        :returns: ``False`` (and no change) when ``old_token`` is missing or
            already revoked, e.g. a concurrent refresh won the race.
        """

    def revoke_all_for_user(self, user_id: str) -> int:
        """
        Revoke every active record of ``user_id``.

        :returns: Number of records revoked.
        """


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    In-process refresh-token store.

    .. note::
       A single lock guards both indexes, which makes rotation and bulk
       revocation atomic for every thread of the process.
    """

    def __init__(self) -> None:
        self._by_token: dict[str, RefreshToken] = {}
        self._by_user: dict[str, list[str]] = {}
        self._lock = threading.Lock()

    def add(self, record: RefreshToken) -> None:
        with self._lock:
            self._insert(record)

    def _insert(self, record: RefreshToken) -> None:
        if record.token in self._by_token:
            raise ValueError("Refresh token already registered.")
        self._by_token[record.token] = record
        self._by_user.setdefault(record.user_id, []).append(record.token)

    def get(self, token: str) -> RefreshToken | None:
        with self._lock:
            return self._by_token.get(token)

    def revoke(self, token: str) -> bool:
        with self._lock:
            record = self._by_token.get(token)
            if record is None or record.is_revoked:
                return False
            record.revoke()
            return True

    def rotate(self, old_token: str, new_record: RefreshToken) -> bool:
        with self._lock:
            old = self._by_token.get(old_token)
            if old is None or old.is_revoked:
                return False
            self._insert(new_record)
            old.revoke()
            return True

    def revoke_all_for_user(self, user_id: str) -> int:
        with self._lock:
            revoked = 0
            for token in self._by_user.get(user_id, []):
                record = self._by_token[token]
                if not record.is_revoked:
                    record.revoke()
                    revoked += 1
            return revoked
