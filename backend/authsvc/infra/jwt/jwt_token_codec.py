# authsvc/infra/jwt/jwt_token_codec.py
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from authsvc.services._shared.durations import DurationError, parse_duration
from authsvc.services._shared.errors import ConfigurationError, TokenInvalidError
from authsvc.services._shared.ports import TokenClaims, TokenCodec, TokenType
from authsvc.services.auth.dto import AuthTokenConfig

log = logging.getLogger(__name__)

SIGNING_ALGORITHM = "HS256"
# Symmetric family only; anything else ("none", RS*, ES*) is refused on decode
ACCEPTED_ALGORITHMS = ("HS256", "HS384", "HS512")


def _parse_ttl(name: str, value: str) -> timedelta:
    try:
        ttl = parse_duration(value)
    except DurationError as exc:
        raise ConfigurationError(f"{name}: {exc}") from exc
    if ttl <= timedelta(0):
        raise ConfigurationError(f"{name} must be a positive duration, got {value!r}")
    return ttl


class JWTTokenCodec(TokenCodec):
    """
    PyJWT adapter issuing HMAC-signed access/refresh tokens.

    Access and refresh tokens use independent secrets. Claims are ``sub``
    (integer user id), ``exp`` (Unix seconds), ``type`` and a random ``jti``
    so two tokens minted in the same second never collide.

    :param config: Secrets and lifetimes.
    :param clock: Returns the current aware UTC time; defaults to ``datetime.now(UTC)``.
    :param enforce_type: Also require the ``type`` claim to match the expected kind.
    :raises ConfigurationError: On empty secrets or unusable lifetimes.
    """

    def __init__(
        self,
        config: AuthTokenConfig,
        *,
        clock: Callable[[], datetime] | None = None,
        enforce_type: bool = True,
    ) -> None:
        if not config.access_secret or not config.refresh_secret:
            raise ConfigurationError("access and refresh secrets must be non-empty")
        if config.access_secret == config.refresh_secret:
            log.warning("jwt.shared_secret", extra={"reason": "access and refresh secrets are equal"})

        self.access_ttl = _parse_ttl("access expiry", config.access_expiry)
        self.refresh_ttl = _parse_ttl("refresh expiry", config.refresh_expiry)
        self.enforce_type = enforce_type
        self._secrets = {
            TokenType.ACCESS: config.access_secret,
            TokenType.REFRESH: config.refresh_secret,
        }
        self._clock = clock or (lambda: datetime.now(UTC))

    # -------------------- issuing --------------------

    def _issue(self, subject: int, token_type: TokenType, ttl: timedelta) -> str:
        expires_at = self._clock() + ttl
        claims: dict[str, Any] = {
            "sub": int(subject),
            "exp": int(expires_at.timestamp()),
            "type": token_type.value,
            "jti": uuid4().hex,
        }
        return jwt.encode(claims, self._secrets[token_type], algorithm=SIGNING_ALGORITHM)

    def issue_access(self, subject: int) -> str:
        return self._issue(subject, TokenType.ACCESS, self.access_ttl)

    def issue_refresh(self, subject: int) -> str:
        return self._issue(subject, TokenType.REFRESH, self.refresh_ttl)

    # -------------------- verification --------------------

    def verify(self, token: str, *, expect_refresh: bool) -> TokenClaims:
        expected = TokenType.expected(expect_refresh)
        try:
            payload = jwt.decode(
                token,
                self._secrets[expected],
                algorithms=list(ACCEPTED_ALGORITHMS),
                # Expiry is checked below against the injected clock; PyJWT's
                # ``sub`` check would reject the integer subject.
                options={
                    "require": ["sub", "exp"],
                    "verify_exp": False,
                    "verify_sub": False,
                },
            )
        except jwt.PyJWTError as exc:
            raise TokenInvalidError(reason=f"{type(exc).__name__}: {exc}") from exc

        subject = payload.get("sub")
        if isinstance(subject, bool) or not isinstance(subject, int):
            raise TokenInvalidError(reason="subject is not an integer")

        exp = payload.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, int | float):
            raise TokenInvalidError(reason="expiry is not numeric")

        try:
            expiry = datetime.fromtimestamp(int(exp), tz=UTC)
        except (OverflowError, OSError, ValueError) as exc:
            raise TokenInvalidError(reason="expiry out of range") from exc
        if self._clock() >= expiry:
            raise TokenInvalidError(reason="expired")

        if self.enforce_type and payload.get("type") != expected.value:
            raise TokenInvalidError(reason=f"type claim is not {expected.value!r}")

        return TokenClaims(user_id=subject, expiry=expiry)
