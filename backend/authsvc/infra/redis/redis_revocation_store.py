import logging
import math
from datetime import timedelta
from typing import cast

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from authsvc.services._shared.errors import RevocationStoreError

log = logging.getLogger(__name__)

DEFAULT_PREFIX = "blacklist:"


class RedisRevocationStore:
    """
    Denylist of raw token strings with a TTL equal to their remaining lifetime.

    Reads fail open: if Redis cannot answer, the token is reported as not
    revoked and the failure is logged. Writes raise
    :class:`RevocationStoreError` so callers decide how much to care.
    """

    enabled = True

    def __init__(self, r: redis.Redis, *, prefix: str = DEFAULT_PREFIX):
        self.r = r
        self.prefix = prefix

    def _k(self, token: str) -> str:
        return f"{self.prefix}{token}"

    def is_revoked(self, token: str) -> bool:
        try:
            return cast(int, self.r.exists(self._k(token))) == 1
        except RedisError as exc:
            log.warning("revocation.read_failed", extra={"reason": type(exc).__name__})
            return False

    def revoke(self, token: str, ttl: timedelta) -> None:
        seconds = ttl.total_seconds()
        if seconds <= 0:
            # Already expired on its own; nothing worth storing
            return
        try:
            # Round up so the record never lapses before the token does; idempotent
            self.r.set(self._k(token), "true", ex=math.ceil(seconds))
        except RedisError as exc:
            raise RevocationStoreError() from exc

    def claim(self, token: str, ttl: timedelta) -> bool:
        seconds = ttl.total_seconds()
        if seconds <= 0:
            return True
        try:
            # SET NX: only the first caller creates the key
            created = self.r.set(self._k(token), "true", ex=math.ceil(seconds), nx=True)
        except RedisError as exc:
            raise RevocationStoreError() from exc
        return bool(created)
