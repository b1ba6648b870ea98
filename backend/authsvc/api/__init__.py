"""HTTP API: versioned blueprint groups mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def join_prefix(*segments: str) -> str:
    """Join URL segments into ``/a/b``, ignoring empty and slash-only parts."""
    parts = [s.strip("/") for s in segments if s and s.strip("/")]
    return "/" + "/".join(parts)


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """
    Mount each ``(blueprint, relative_prefix)`` under ``base_prefix``.

    ``("", ...)`` mounts at the version root, e.g. ``/api/v1/health``;
    ``"/auth"`` gives ``/api/v1/auth/login``.
    """
    for bp, rel_prefix in entries:
        app.register_blueprint(bp, url_prefix=join_prefix(base_prefix, rel_prefix))


def init_app(app: Flask) -> None:
    from authsvc.api.v1 import API_VERSION as V1
    from authsvc.api.v1 import REGISTRY as V1_REGISTRY

    api_base = app.config.get("API_BASE_PREFIX", "/api")
    register_blueprint_group(app, base_prefix=join_prefix(api_base, V1), entries=V1_REGISTRY)


__all__ = ["init_app", "join_prefix", "register_blueprint_group"]
