"""
authsvc.services._shared.ports
==============================

Collection of *ports* (hexagonal interfaces) that define the contracts
for token handling, revocation, credential checks and user lookup.

These ports decouple the auth service from concrete implementations
of token signing, denylist storage, hashing and persistence.

Modules
-------
- :mod:`token_codec`:
    Defines :class:`~.TokenCodec`, :class:`~.TokenClaims` and
    :class:`~.TokenType` for issuing and verifying signed tokens.

- :mod:`revocation_store`:
    Defines :class:`~.RevocationStore` plus the :class:`~.NullRevocationStore`
    (no backend configured) and :class:`~.InMemoryRevocationStore` doubles.

- :mod:`password_hasher`:
    Defines :class:`~.PasswordHasher` to hash and verify credentials.

- :mod:`user_store`:
    Defines :class:`~.UserStore`, :class:`~.UserRecord`, :class:`~.NewUser`
    and the :class:`~.InMemoryUserStore` double.

Design Notes
------------
All these ports follow *Dependency Inversion Principle (DIP)* to keep
the service layer independent from implementation details.
Concrete adapters (Redis, SQLAlchemy, PyJWT, Werkzeug) implement these
interfaces under ``authsvc.infra``.
"""

from __future__ import annotations

from .password_hasher import PasswordHasher
from .revocation_store import InMemoryRevocationStore, NullRevocationStore, RevocationStore
from .token_codec import TokenClaims, TokenCodec, TokenType
from .user_store import InMemoryUserStore, NewUser, UserRecord, UserStore

__all__ = [
    "TokenCodec",
    "TokenClaims",
    "TokenType",
    "RevocationStore",
    "NullRevocationStore",
    "InMemoryRevocationStore",
    "PasswordHasher",
    "UserStore",
    "UserRecord",
    "NewUser",
    "InMemoryUserStore",
]
