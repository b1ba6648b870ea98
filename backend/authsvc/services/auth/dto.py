# authsvc/services/auth/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from authsvc.services._shared.ports.user_store import UserRecord

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param email: Login email (normalized by the service).
    :type email: str
    :param password: Raw password (hashed before persistence).
    :type password: str
    :param name: Display name.
    :type name: str
    """

    email: str
    password: str
    name: str = ""


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh token.
    :type refresh_token: str
    """

    refresh_token: str


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    Both tokens are revoked independently; either may already be invalid.

    :param access_token: Encoded access token.
    :type access_token: str
    :param refresh_token: Encoded refresh token.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access token.
    :type access_token: str
    :param refresh_token: Encoded refresh token.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Output DTO representing public-safe user data (no password hash).

    :param id: User identifier.
    :type id: int
    :param email: Email address.
    :type email: str
    :param name: Display name.
    :type name: str
    :param created_at: Creation timestamp when known.
    :type created_at: datetime | None
    """

    id: int
    email: str
    name: str
    created_at: datetime | None = None

    @classmethod
    def from_record(cls, user: UserRecord) -> UserPublicOut:
        return cls(id=user.id, email=user.email, name=user.name, created_at=user.created_at)


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_secret: HMAC secret for access tokens.
    :type access_secret: str
    :param refresh_secret: HMAC secret for refresh tokens.
    :type refresh_secret: str
    :param access_expiry: Access token lifetime (duration string, e.g. ``"15m"``).
    :type access_expiry: str
    :param refresh_expiry: Refresh token lifetime (duration string, e.g. ``"168h"``).
    :type refresh_expiry: str
    """

    access_secret: str = field(repr=False)
    refresh_secret: str = field(repr=False)
    access_expiry: str = "15m"
    refresh_expiry: str = "168h"

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> AuthTokenConfig:
        """Build from a Flask config mapping (``JWT_*`` keys)."""
        return cls(
            access_secret=str(config.get("JWT_ACCESS_SECRET") or ""),
            refresh_secret=str(config.get("JWT_REFRESH_SECRET") or ""),
            access_expiry=str(config.get("JWT_ACCESS_EXPIRY", "15m")),
            refresh_expiry=str(config.get("JWT_REFRESH_EXPIRY", "168h")),
        )
