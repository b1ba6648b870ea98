"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask, HTTP, or SQLAlchemy directly. They serve as stable contracts between
adapters (user store, revocation store, token codec) and application services.

The translation to HTTP responses (RFC 7807) is handled by
``authsvc/core/errors.py`` via :func:`translate_service_error`.

Credential and token failures carry a fixed public message. Whatever caused
them (unknown email, wrong password, bad signature, expiry, wrong ``alg``)
is kept on the ``reason`` attribute for logs and never rendered.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from adapters or domain logic.
    - The API layer translates them to ``APIError`` subclasses.
    """

    pass


class ConfigurationError(ServiceError):
    """Raised at startup when token or store configuration is unusable."""


# --------------------------------------------------------------------------- #
# Credential / token failures (uniform public messages)
# --------------------------------------------------------------------------- #


class _UniformMessageError(ServiceError):
    """Error whose ``str()`` is fixed regardless of the underlying cause."""

    message = "error"

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(self.message)
        self.reason = reason

    def __str__(self) -> str:
        return self.message


class InvalidCredentialsError(_UniformMessageError):
    """Unknown email, wrong password or unreachable user store during login."""

    message = "invalid credentials"


class TokenInvalidError(_UniformMessageError):
    """Bad signature, wrong algorithm, malformed claims, wrong type or expired."""

    message = "invalid or expired token"


class TokenRevokedError(_UniformMessageError):
    """The token string is present in the revocation store."""

    message = "token has been revoked"


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the store.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


# --------------------------------------------------------------------------- #
# Backend availability
# --------------------------------------------------------------------------- #


class UserStoreError(ServiceError):
    """The user store could not answer (connectivity, timeouts, driver errors)."""

    def __init__(self, message: str = "user store unavailable") -> None:
        super().__init__(message)


class RevocationStoreError(ServiceError):
    """A revocation write did not reach the backend."""

    def __init__(self, message: str = "revocation store unavailable") -> None:
        super().__init__(message)
