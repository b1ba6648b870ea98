from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from authsvc.services._shared.errors import ConflictError


@dataclass(frozen=True, slots=True)
class NewUser:
    """
    Write-model for a user about to be persisted.

    :ivar email: Normalized login email.
    :ivar password_hash: Already-hashed password.
    :ivar name: Display name.
    """

    email: str
    password_hash: str
    name: str


@dataclass(frozen=True, slots=True)
class UserRecord:
    """
    Read-only snapshot of a stored user.

    :ivar id: User identifier (token subject).
    :ivar email: Login email.
    :ivar password_hash: Stored password hash.
    :ivar name: Display name.
    :ivar created_at: Creation timestamp, when the store tracks it.
    """

    id: int
    email: str
    password_hash: str
    name: str
    created_at: datetime | None = None


class UserStore(Protocol):
    """
    Identity store consumed by the auth service.

    Lookups return ``None`` for a genuine miss and raise
    :class:`~authsvc.services._shared.errors.UserStoreError` when the
    backend cannot answer, so callers never confuse the two.
    """

    def create(self, user: NewUser) -> UserRecord:
        """
        Persist a new user.

        :raises ConflictError: If the email is already taken.
        """

    def get_by_email(self, email: str) -> UserRecord | None: ...

    def get_by_id(self, user_id: int) -> UserRecord | None: ...


class InMemoryUserStore(UserStore):
    """Simple in-memory user store with sequential ids."""

    def __init__(self) -> None:
        self._by_id: dict[int, UserRecord] = {}
        self._seq = 0
        self._lock = threading.Lock()

    def create(self, user: NewUser) -> UserRecord:
        with self._lock:
            if any(u.email == user.email for u in self._by_id.values()):
                raise ConflictError("User", "email already exists")
            self._seq += 1
            record = UserRecord(
                id=self._seq,
                email=user.email,
                password_hash=user.password_hash,
                name=user.name,
                created_at=datetime.now(UTC),
            )
            self._by_id[record.id] = record
            return record

    def get_by_email(self, email: str) -> UserRecord | None:
        norm = email.lower().strip()
        return next((u for u in self._by_id.values() if u.email == norm), None)

    def get_by_id(self, user_id: int) -> UserRecord | None:
        return self._by_id.get(user_id)

    def delete(self, user_id: int) -> None:
        """Drop a user (test helper)."""
        self._by_id.pop(user_id, None)
