"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginSchema, LogoutSchema, RefreshSchema, RegisterSchema, TokenPairSchema
from .user import UserSchema

__all__ = [
    "RegisterSchema",
    "LoginSchema",
    "RefreshSchema",
    "LogoutSchema",
    "TokenPairSchema",
    "UserSchema",
]
