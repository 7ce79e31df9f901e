"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Load .env during development (no-op when the file is missing)
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


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing. Defaults to a development-safe
        placeholder and should be overridden in production.
    JWT_SECRET_KEY: str
        Key used by ``flask-jwt-extended`` for signing access and refresh
        tokens.
    JWT_ALGORITHM: str
        Signing algorithm (``HS256``).
    JWT_ENCODE_ISSUER / JWT_DECODE_ISSUER: str
        Issuer claim written to and required from every token.
    JWT_ENCODE_AUDIENCE / JWT_DECODE_AUDIENCE: str
        Audience claim written to and required from every token.
    JWT_ACCESS_TOKEN_EXPIRES: timedelta
        Access token lifetime (15 minutes).
    JWT_REFRESH_TOKEN_EXPIRES: timedelta
        Refresh token lifetime (7 days).
    PAGINATION_DEFAULT_LIMIT: int
        Page size used when ``limit`` is omitted.
    PAGINATION_MAX_LIMIT: int
        Upper bound applied to ``limit``.
    SEED_ON_STARTUP: bool
        Populate the in-memory store with fake data when the app is built.
    SEED_RANDOM_SEED: int
        Seed fed to Faker so generated data is reproducible.
    REFRESH_STORE: str
        Refresh-token backend, ``"memory"`` or ``"redis"``.
    REDIS_URL: str | None
        Connection URL used when ``REFRESH_STORE == "redis"``.
    JSON_SORT_KEYS: bool
        Keeps JSON output order stable when ``False``.
    PROPAGATE_EXCEPTIONS: bool
        Controls Flask error propagation.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.
    DEBUG: bool
        Toggles Flask debug mode.
    TESTING: bool
        Enables Flask testing mode when ``True``.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "mock-secret-key-for-development-only")
    JWT_ALGORITHM = "HS256"
    JWT_ENCODE_ISSUER = os.getenv("JWT_ISSUER", "mock-api")
    JWT_DECODE_ISSUER = JWT_ENCODE_ISSUER
    JWT_ENCODE_AUDIENCE = os.getenv("JWT_AUDIENCE", "mock-client")
    JWT_DECODE_AUDIENCE = JWT_ENCODE_AUDIENCE
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=15)
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=7)

    # Pagination
    PAGINATION_DEFAULT_LIMIT = 10
    PAGINATION_MAX_LIMIT = 100

    # In-memory data store
    SEED_ON_STARTUP = env_bool("SEED_ON_STARTUP", True)
    SEED_RANDOM_SEED = env_int("SEED_RANDOM_SEED", 123)
    REFRESH_STORE = os.getenv("REFRESH_STORE", "memory")
    REDIS_URL = os.getenv("REDIS_URL")

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and seeds the store on start-up so the
    client has something to browse.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Starts with an empty store; tests insert their own fixtures.
    - Always uses the in-memory refresh store.
    - Propagates exceptions so pytest can surface tracebacks directly.
    """

    TESTING = True
    DEBUG = False
    SEED_ON_STARTUP = False
    REFRESH_STORE = "memory"
    REDIS_URL = None
    USE_PROXYFIX = False
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug disabled while relying on WSGI-level log configuration for
    noise control.
    """

    DEBUG = False
    PROPAGATE_EXCEPTIONS = False


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
