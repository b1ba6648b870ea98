from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for one-way password hashing and verification."""

    def hash(self, raw: str) -> str: ...

    def verify(self, hashed: str, raw: str) -> bool:
        """Return ``True`` only when ``raw`` matches ``hashed``; never raises on mismatch."""
        ...
