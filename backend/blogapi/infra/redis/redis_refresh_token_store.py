# blogapi/infra/redis/redis_refresh_token_store.py
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import UTC, datetime

import redis  # type: ignore[import-untyped]

from blogapi.models.refresh_token import RefreshToken
from blogapi.services._shared.ports import RefreshTokenStore

# Expired records outlive their token by this much so a late refresh is
# reported as expired rather than unknown
EXPIRED_RECORD_GRACE_SECONDS = 24 * 3600


def _b(value: bytes | None, default: str = "") -> str:
    return value.decode() if value is not None else default


@dataclass(slots=True)
class RedisRefreshTokenStore(RefreshTokenStore):
    """
    Redis-backed refresh-token store.

    Layout
    ------
    ``rt:<sha256(token)>``
        Hash with ``id``, ``token``, ``user_id``, ``expires_at``,
        ``created_at`` (epoch seconds) and ``is_revoked`` (``"0"``/``"1"``).
        The key expires ``EXPIRED_RECORD_GRACE_SECONDS`` after the token.
    ``rt:u:<user_id>``
        Set of token digests issued to the user. Its TTL is pushed out on
        every insert; digests whose hash is gone are pruned by
        :meth:`revoke_all_for_user`.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis

    # -------------------- helpers --------------------

    @staticmethod
    def _digest(token: str) -> str:
        return hashlib.sha256(token.encode()).hexdigest()

    def _k(self, token: str) -> str:
        return f"rt:{self._digest(token)}"

    @staticmethod
    def _ku(user_id: str) -> str:
        return f"rt:u:{user_id}"

    @staticmethod
    def _to_ts(dt: datetime) -> int:
        return int(dt.timestamp())

    def _mapping(self, record: RefreshToken) -> dict[str, str]:
        return {
            "id": record.id,
            "token": record.token,
            "user_id": record.user_id,
            "expires_at": str(self._to_ts(record.expires_at)),
            "created_at": str(self._to_ts(record.created_at)),
            "is_revoked": "1" if record.is_revoked else "0",
        }

    def _ttl(self, record: RefreshToken) -> int:
        remaining = self._to_ts(record.expires_at) - self._to_ts(datetime.now(UTC))
        return max(1, remaining + EXPIRED_RECORD_GRACE_SECONDS)

    @staticmethod
    def _from_hash(h: dict[bytes, bytes]) -> RefreshToken:
        return RefreshToken(
            id=_b(h.get(b"id")),
            token=_b(h.get(b"token")),
            user_id=_b(h.get(b"user_id")),
            expires_at=datetime.fromtimestamp(int(_b(h.get(b"expires_at"), "0")), tz=UTC),
            created_at=datetime.fromtimestamp(int(_b(h.get(b"created_at"), "0")), tz=UTC),
            is_revoked=_b(h.get(b"is_revoked"), "0") == "1",
        )

    # -------------------- API ------------------------

    def add(self, record: RefreshToken) -> None:
        """Insert the record *before* the JWT is handed to the client."""
        key = self._k(record.token)
        pipe = self.r.pipeline(transaction=True)
        pipe.hset(key, mapping=self._mapping(record))
        pipe.expire(key, self._ttl(record))
        pipe.sadd(self._ku(record.user_id), self._digest(record.token))
        pipe.expire(self._ku(record.user_id), self._ttl(record))
        pipe.execute()

    def get(self, token: str) -> RefreshToken | None:
        h = self.r.hgetall(self._k(token))
        if not h:
            return None
        return self._from_hash(h)

    def revoke(self, token: str) -> bool:
        key = self._k(token)
        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(key)
                    state = p.hget(key, "is_revoked")
                    if state is None or state == b"1":
                        p.unwatch()
                        return False
                    p.multi()
                    p.hset(key, "is_revoked", "1")
                    p.execute()
                    return True
            except redis.WatchError:
                continue

    def rotate(self, old_token: str, new_record: RefreshToken) -> bool:
        """
        Revoke ``old_token`` and insert ``new_record`` in one MULTI/EXEC block.

        WATCH on the old key makes a concurrent rotation or revocation abort
        this transaction; the retry then sees the revoked flag and returns
        ``False``.
        """
        k_old = self._k(old_token)
        k_new = self._k(new_record.token)
        k_user = self._ku(new_record.user_id)

        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(k_old)
                    state = p.hget(k_old, "is_revoked")
                    if state is None or state == b"1":
                        p.unwatch()
                        return False

                    p.multi()
                    p.hset(k_old, "is_revoked", "1")
                    p.hset(k_new, mapping=self._mapping(new_record))
                    p.expire(k_new, self._ttl(new_record))
                    p.sadd(k_user, self._digest(new_record.token))
                    p.expire(k_user, self._ttl(new_record))
                    p.execute()
                return True
            except redis.WatchError:
                # Concurrent modification detected; retry loop
                continue

    def revoke_all_for_user(self, user_id: str) -> int:
        key_u = self._ku(user_id)
        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(key_u)
                    digests = sorted(_b(member) for member in p.smembers(key_u))
                    if digests:
                        p.watch(key_u, *(f"rt:{d}" for d in digests))
                    states = {d: p.hget(f"rt:{d}", "is_revoked") for d in digests}
                    active = [d for d, state in states.items() if state == b"0"]
                    stale = [d for d, state in states.items() if state is None]
                    p.multi()
                    for digest in active:
                        p.hset(f"rt:{digest}", "is_revoked", "1")
                    if stale:
                        p.srem(key_u, *stale)
                    p.execute()
                return len(active)
            except redis.WatchError:
                continue

