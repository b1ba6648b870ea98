"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`authsvc.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``authsvc.services._shared.base``)
    * :class:`BaseService`

- Auth service (from ``authsvc.services.auth``)
    * :class:`AuthService`
    * DTOs: :class:`RegisterIn`, :class:`LoginIn`, :class:`RefreshIn`,
      :class:`LogoutIn`, :class:`TokenPairOut`, :class:`UserPublicOut`,
      :class:`AuthTokenConfig`

Wiring
------
:func:`init_app` builds one :class:`AuthService` per application from the
Flask config and stores it in ``app.extensions["auth_service"]``.
"""

from __future__ import annotations

import logging

from flask import Flask

from ._shared.base import BaseService
from .auth.dto import (
    AuthTokenConfig,
    LoginIn,
    LogoutIn,
    RefreshIn,
    RegisterIn,
    TokenPairOut,
    UserPublicOut,
)
from .auth.service import AuthService

log = logging.getLogger(__name__)

EXTENSION_KEY = "auth_service"


def build_auth_service(app: Flask) -> AuthService:
    """Assemble :class:`AuthService` with the production adapters.

    :param app: Application whose config drives the adapters.
    :raises ConfigurationError: On placeholder secrets (production) or
        unusable token lifetimes.
    """
    from authsvc.core.config import ensure_secrets
    from authsvc.core.extensions import get_redis
    from authsvc.infra.jwt import JWTTokenCodec
    from authsvc.infra.redis import RedisRevocationStore
    from authsvc.infra.security import WerkzeugPasswordHasher
    from authsvc.infra.sqlalchemy import SQLAlchemyUserStore

    ensure_secrets(app.config)

    tokens = JWTTokenCodec(
        AuthTokenConfig.from_mapping(app.config),
        enforce_type=bool(app.config.get("JWT_ENFORCE_TOKEN_TYPE", True)),
    )

    client = get_redis()
    revocations = None
    if client is not None:
        revocations = RedisRevocationStore(
            client, prefix=app.config.get("REVOCATION_KEY_PREFIX", "blacklist:")
        )
    else:
        log.warning("revocation.disabled")

    return AuthService(
        users=SQLAlchemyUserStore(),
        hasher=WerkzeugPasswordHasher(method=app.config.get("PASSWORD_HASH_METHOD")),
        tokens=tokens,
        revocations=revocations,
    )


def init_app(app: Flask) -> None:
    """Build the shared auth service and register it on ``app.extensions``."""
    app.extensions[EXTENSION_KEY] = build_auth_service(app)


__all__ = [
    "BaseService",
    "AuthService",
    "AuthTokenConfig",
    "RegisterIn",
    "LoginIn",
    "RefreshIn",
    "LogoutIn",
    "TokenPairOut",
    "UserPublicOut",
    "EXTENSION_KEY",
    "build_auth_service",
    "init_app",
]
