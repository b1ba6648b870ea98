"""Cross-origin policy for the ``/api`` routes."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

# Browser clients send bearer tokens and may supply their own request id
ALLOWED_HEADERS = ["Authorization", "Content-Type", "X-Request-ID"]
EXPOSED_HEADERS = ["X-Request-ID"]


def parse_origins(raw: str | None) -> list[str] | str:
    """
    Turn ``CORS_ORIGINS`` into what Flask-Cors expects.

    :param raw: Comma-separated origins; blank or ``"*"`` means any origin.
    :returns: ``"*"`` or the list of explicit origins.
    """
    origins = [o.strip() for o in (raw or "").split(",") if o.strip()]
    if not origins or "*" in origins:
        return "*"
    return origins


def init_app(app: Flask) -> None:
    """
    Apply CORS to ``/api/*``.

    Credentials (cookies) are only allowed with an explicit origin list;
    a wildcard policy still accepts the ``Authorization`` header.
    """
    origins = parse_origins(app.config.get("CORS_ORIGINS"))
    api_prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")

    CORS(
        app,
        resources={rf"{api_prefix}/*": {"origins": origins}},
        allow_headers=ALLOWED_HEADERS,
        expose_headers=EXPOSED_HEADERS,
        supports_credentials=origins != "*",
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
