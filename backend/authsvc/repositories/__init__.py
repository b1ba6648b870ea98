"""Repository package exposing persistence-layer access."""

from __future__ import annotations

from authsvc.repositories.user import UserRepository

__all__ = ["UserRepository"]
