"""Application configuration module."""

from __future__ import annotations

import os
from datetime import timedelta
from typing import Mapping

from sqlalchemy.engine import URL

DB_ENV_VARS = ("DB_USER", "DB_PASSWORD", "DB_HOST", "DB_PORT", "DB_NAME")


class ConfigError(RuntimeError):
    """Raised when required configuration cannot be read at startup."""


def database_uri_from_env(environ: Mapping[str, str] | None = None) -> str:
    """Build the PostgreSQL URI from the DB_* environment variables."""

    environ = os.environ if environ is None else environ
    missing = [name for name in DB_ENV_VARS if not environ.get(name)]
    if missing:
        raise ConfigError(
            "Missing database settings: {}.".format(", ".join(missing))
        )

    try:
        port = int(environ["DB_PORT"])
    except ValueError as exc:
        raise ConfigError("DB_PORT must be an integer.") from exc

    url = URL.create(
        "postgresql+psycopg2",
        username=environ["DB_USER"],
        password=environ["DB_PASSWORD"],
        host=environ["DB_HOST"],
        port=port,
        database=environ["DB_NAME"],
    )
    return url.render_as_string(hide_password=False)


class Config:
    """Base configuration for the Flask application."""

    # Core
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Database; resolved from DB_* variables in create_app when unset
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Auth
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv("JWT_EXPIRES_HOURS", "72")))
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "pbkdf2:sha256:600000")

    # CORS
    _raw_origins = os.getenv("ORIGINS", "*")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

    # Rate limiting
    RATE_LIMIT = os.getenv("RATE_LIMIT", "60 per minute")
    RATELIMIT_HEADERS_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_KEY_PREFIX = os.getenv("RATELIMIT_KEY_PREFIX", "")
