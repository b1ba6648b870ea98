from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol


class TokenType(str, Enum):
    """Value of the ``type`` claim embedded in every token."""

    ACCESS = "access"
    REFRESH = "refresh"

    @classmethod
    def expected(cls, expect_refresh: bool) -> TokenType:
        return cls.REFRESH if expect_refresh else cls.ACCESS


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Decoded view of a verified token.

    :ivar user_id: Subject the token was issued for.
    :ivar expiry: Absolute expiration (UTC, aware).
    """

    user_id: int
    expiry: datetime


class TokenCodec(Protocol):
    """Port for issuing and verifying signed, expiring tokens."""

    def issue_access(self, subject: int) -> str: ...

    def issue_refresh(self, subject: int) -> str: ...

    def verify(self, token: str, *, expect_refresh: bool) -> TokenClaims:
        """
        Verify signature, algorithm, structure and expiry.

        :raises TokenInvalidError: On any failure; the cause is never exposed.
        """
        ...
