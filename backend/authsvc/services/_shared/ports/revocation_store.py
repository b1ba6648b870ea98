from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Protocol


class RevocationStore(Protocol):
    """
    Abstraction for a time-bounded denylist keyed by the **raw token string**.

    ``revoke`` is idempotent: revoking twice keeps the token revoked until
    the (latest) TTL elapses. A non-positive TTL is a no-op because the
    token has already expired on its own.

    ``claim`` is the atomic set-if-absent variant used for single-use
    tokens: it returns ``True`` when this call added the record and
    ``False`` when the token was already revoked.
    """

    enabled: bool

    def is_revoked(self, token: str) -> bool: ...
    def revoke(self, token: str, ttl: timedelta) -> None: ...
    def claim(self, token: str, ttl: timedelta) -> bool: ...


class NullRevocationStore:
    """
    Stand-in used when no revocation backend is configured.

    Nothing is ever revoked, so logged-out tokens stay valid until they
    expire naturally.
    """

    enabled = False

    def is_revoked(self, token: str) -> bool:
        return False

    def revoke(self, token: str, ttl: timedelta) -> None:
        return None

    def claim(self, token: str, ttl: timedelta) -> bool:
        return True


class InMemoryRevocationStore:
    """
    Process-local denylist honouring TTLs against an injectable clock.

    .. note::
       Uses a threading lock so it can back a single-process dev server.
    """

    enabled = True

    def __init__(self, *, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(UTC))
        self._deadlines: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def is_revoked(self, token: str) -> bool:
        with self._lock:
            deadline = self._deadlines.get(token)
            if deadline is None:
                return False
            if deadline <= self._clock():
                # Lazy expiry, mirrors a key TTL elapsing
                del self._deadlines[token]
                return False
            return True

    def revoke(self, token: str, ttl: timedelta) -> None:
        if ttl <= timedelta(0):
            return
        with self._lock:
            deadline = self._clock() + ttl
            current = self._deadlines.get(token)
            self._deadlines[token] = max(deadline, current) if current else deadline

    def claim(self, token: str, ttl: timedelta) -> bool:
        if ttl <= timedelta(0):
            return True
        with self._lock:
            now = self._clock()
            current = self._deadlines.get(token)
            if current is not None and current > now:
                return False
            self._deadlines[token] = now + ttl
            return True

    def __len__(self) -> int:
        return len(self._deadlines)
