"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from authsvc.api.deps import get_auth_service, json_response, timing
from authsvc.core.extensions import db, get_redis

bp = Blueprint("health", __name__)


def _revocation_status() -> str:
    if not get_auth_service().revocations.enabled:
        return "disabled"
    client = get_redis()
    if client is None:
        return "ok"
    try:
        client.ping()
    except RedisError:
        current_app.logger.warning("healthcheck.redis_error")
        return "fail"
    return "ok"


@bp.get("/health")
@timing
def healthcheck():
    """Return application, database and revocation backend health."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"
    version = current_app.config.get("APP_VERSION", "dev")
    payload = {
        "status": "ok",
        "db": db_status,
        "revocation": _revocation_status(),
        "version": version,
    }
    return json_response(payload)
