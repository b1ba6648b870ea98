"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Placeholder secrets shipped for local runs only
PLACEHOLDER_SECRETS: Final[frozenset[str]] = frozenset({"CHANGE_ME_ACCESS", "CHANGE_ME_REFRESH"})


# Loads .env during development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_float(name: str, default: float) -> float:
    """Parse a float from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return float(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    JWT_ACCESS_SECRET: str
        HMAC secret signing access tokens.
    JWT_REFRESH_SECRET: str
        HMAC secret signing refresh tokens. Independent from the access one.
    JWT_ACCESS_EXPIRY: str
        Access token lifetime as a duration string (``"15m"``).
    JWT_REFRESH_EXPIRY: str
        Refresh token lifetime as a duration string (``"168h"``).
    JWT_ENFORCE_TOKEN_TYPE: bool
        Reject tokens whose ``type`` claim differs from the expected one.
    REVOCATION_KEY_PREFIX: str
        Prefix prepended to raw token strings in the revocation store.
    REDIS_URL: str | None
        Revocation backend. When unset the service runs without revocation.
    REDIS_SOCKET_TIMEOUT: float
        Upper bound in seconds for any single Redis round-trip.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    SQLALCHEMY_ENGINE_OPTIONS: dict
        Engine keyword arguments; bounds pool checkout time.
    PASSWORD_HASH_METHOD: str | None
        Werkzeug hashing method; ``None`` keeps Werkzeug's default.
    RATELIMIT_ENABLED: bool
        Toggle Flask-Limiter globally.
    RATELIMIT_STORAGE_URI: str
        Limiter counter storage; falls back to ``REDIS_URL`` then memory.
    AUTH_LOGIN_RATE_LIMIT: str
        Limit string applied to ``POST /auth/login``.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Token signing
    JWT_ACCESS_SECRET = os.getenv("JWT_SECRET", "CHANGE_ME_ACCESS")
    JWT_REFRESH_SECRET = os.getenv("JWT_REFRESH_SECRET", "CHANGE_ME_REFRESH")
    JWT_ACCESS_EXPIRY = os.getenv("JWT_ACCESS_EXPIRY", "15m")
    JWT_REFRESH_EXPIRY = os.getenv("JWT_REFRESH_EXPIRY", "168h")
    JWT_ENFORCE_TOKEN_TYPE = env_bool("JWT_ENFORCE_TOKEN_TYPE", True)

    # Revocation backend
    REVOCATION_KEY_PREFIX = os.getenv("REVOCATION_KEY_PREFIX", "blacklist:")
    REDIS_URL = os.getenv("REDIS_URL") or None
    REDIS_SOCKET_TIMEOUT = env_float("REDIS_SOCKET_TIMEOUT", 0.5)

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    SQLALCHEMY_ENGINE_OPTIONS: dict[str, Any] = {"pool_pre_ping": True}

    # Credentials
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD") or None

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Rate limiting (Flask-Limiter); shares Redis with revocation when set
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI") or REDIS_URL or "memory://"
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Runs without a revocation backend; tests wire one explicitly.
    - Uses a cheap hashing method so credential tests stay fast.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ENGINE_OPTIONS: dict[str, Any] = {}
    JWT_ACCESS_SECRET = "test-access-secret-0123456789abcdef"
    JWT_REFRESH_SECRET = "test-refresh-secret-0123456789abcdef"
    REDIS_URL = None
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URI = "memory://"
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled and bounds the connection pool wait.
    Placeholder secrets are rejected at startup (see :func:`ensure_secrets`).
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    SQLALCHEMY_ENGINE_OPTIONS: dict[str, Any] = {"pool_pre_ping": True, "pool_timeout": 5}
    REQUIRE_REAL_SECRETS = True


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


def ensure_secrets(config: Mapping[str, Any]) -> None:
    """Refuse placeholder signing secrets when ``REQUIRE_REAL_SECRETS`` is set.

    :param config: Flask config mapping.
    :raises ConfigurationError: If a placeholder secret is still configured.
    """
    if not config.get("REQUIRE_REAL_SECRETS", False):
        return

    from authsvc.services._shared.errors import ConfigurationError

    for key in ("JWT_ACCESS_SECRET", "JWT_REFRESH_SECRET"):
        if config.get(key) in PLACEHOLDER_SECRETS:
            raise ConfigurationError(f"{key} must be set to a real secret")
