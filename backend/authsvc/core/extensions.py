"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import logging

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

log = logging.getLogger(__name__)

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
limiter = Limiter(key_func=get_remote_address)
redis_client: redis.Redis | None = None


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations and the optional Redis client.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`authsvc.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Notes
    -----
    Redis backs token revocation only. When ``REDIS_URL`` is unset the
    client stays ``None`` and the service runs without revocation. When it
    is set but unreachable at startup the client is kept anyway: reads fail
    open per call, so a late-starting Redis is picked up without a restart.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from authsvc import models as _models  # noqa: F401

    migrate.init_app(app, db)
    limiter.init_app(app)

    global redis_client
    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        redis_client = None
        app.extensions.pop("redis_client", None)
        return

    timeout = float(app.config.get("REDIS_SOCKET_TIMEOUT", 0.5))
    redis_client = redis.Redis.from_url(
        redis_url,
        socket_timeout=timeout,
        socket_connect_timeout=timeout,
    )
    try:
        redis_client.ping()
    except RedisError as exc:
        log.warning("redis.unreachable_at_startup", extra={"reason": str(exc)})
    app.extensions["redis_client"] = redis_client


def get_redis() -> redis.Redis | None:
    """Return the initialized Redis client, or ``None`` when not configured."""
    return redis_client
