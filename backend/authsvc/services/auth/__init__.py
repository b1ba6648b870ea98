"""Authentication lifecycle: registration, login, rotation, logout, identity."""

from .dto import AuthTokenConfig, LoginIn, LogoutIn, RefreshIn, RegisterIn, TokenPairOut, UserPublicOut
from .service import AuthService

__all__ = [
    "AuthService",
    "AuthTokenConfig",
    "RegisterIn",
    "LoginIn",
    "RefreshIn",
    "LogoutIn",
    "TokenPairOut",
    "UserPublicOut",
]
