"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request

from authsvc.core.errors import Unauthorized
from authsvc.services import EXTENSION_KEY, AuthService

F = TypeVar("F", bound=Callable[..., Any])

BEARER_PREFIX = "bearer "


def get_auth_service() -> AuthService:
    """Return the :class:`AuthService` built for the current application."""

    return cast(AuthService, current_app.extensions[EXTENSION_KEY])


def bearer_token() -> str:
    """Extract the token from ``Authorization: Bearer <token>``.

    :raises Unauthorized: When the header is missing or malformed.
    """

    header = request.headers.get("Authorization", "")
    if not header.lower().startswith(BEARER_PREFIX):
        raise Unauthorized("Authorization header required", code="missing_token")
    token = header[len(BEARER_PREFIX) :].strip()
    if not token:
        raise Unauthorized("Authorization header required", code="missing_token")
    return token


def require_auth(func: F) -> F:
    """Ensure the request carries a valid, non-revoked access token.

    On success ``g.user_id`` holds the token subject and ``g.access_token``
    the raw bearer string.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        token = bearer_token()
        claims = get_auth_service().authenticate(token)
        g.user_id = claims.user_id
        g.access_token = token
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
