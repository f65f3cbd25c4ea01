"""Configuration module for the fleet API."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from fleet.core.exceptions import ConfigurationError

load_dotenv()

DEVELOPMENT_STATIC_USERS = "admin:admin123:admin,user:user123:user"
MIN_PRODUCTION_SECRET_LENGTH = 32


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class StaticCredential:
    username: str
    secret: str
    role: str


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    DATABASE_URL: str
    DB_CONNECTIVITY_REQUIRED: bool
    JWT_SECRET: str
    JWT_ISSUER: str
    JWT_AUDIENCE: str
    JWT_ACCESS_TTL_MINUTES: int
    AUTH_STATIC_USERS: tuple[StaticCredential, ...]
    API_HOST: str
    API_PORT: int
    API_PREFIX: str
    LOG_LEVEL: str
    LOG_FILE: str

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def parse_static_users(raw: str) -> tuple[StaticCredential, ...]:
    """Parse ``name:secret:role`` entries separated by commas."""
    entries: list[StaticCredential] = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        parts = chunk.split(":")
        if len(parts) != 3 or not all(part.strip() for part in parts):
            raise ConfigurationError("AUTH_STATIC_USERS entries must look like name:secret:role.")
        username, secret, role = (part.strip() for part in parts)
        entries.append(StaticCredential(username=username, secret=secret, role=role.lower()))
    return tuple(entries)


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    production = resolved_env == "production"
    debug = _as_bool(os.getenv("DEBUG"), default=not production)

    config = Config(
        APP_NAME=os.getenv("APP_NAME", "Fleet API"),
        APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=debug if not production else False,
        DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./fleet.db"),
        DB_CONNECTIVITY_REQUIRED=_as_bool(os.getenv("DB_CONNECTIVITY_REQUIRED"), default=production),
        JWT_SECRET=os.getenv("JWT_SECRET", ""),
        JWT_ISSUER=os.getenv("JWT_ISSUER", "" if production else "fleet-api"),
        JWT_AUDIENCE=os.getenv("JWT_AUDIENCE", "" if production else "fleet-api-clients"),
        JWT_ACCESS_TTL_MINUTES=int(os.getenv("JWT_ACCESS_TTL_MINUTES", "60")),
        AUTH_STATIC_USERS=parse_static_users(
            os.getenv("AUTH_STATIC_USERS", "" if production else DEVELOPMENT_STATIC_USERS)
        ),
        API_HOST=os.getenv("API_HOST", "0.0.0.0"),
        API_PORT=int(os.getenv("API_PORT", "8000")),
        API_PREFIX=os.getenv("API_PREFIX", "/api/v1"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", ""),
    )
    _validate_config(config)
    return config


def _validate_database_url(database_url: str) -> None:
    parsed = urlparse(database_url)
    if parsed.scheme not in {"sqlite", "postgresql", "postgresql+psycopg2"}:
        raise ConfigurationError(
            "DATABASE_URL must use sqlite:// or postgresql:// style URL."
        )
    if parsed.scheme.startswith("postgresql") and not parsed.hostname:
        raise ConfigurationError("PostgreSQL DATABASE_URL is missing hostname.")


def _validate_config(config: Config) -> None:
    _validate_database_url(config.DATABASE_URL)

    if not config.JWT_SECRET:
        raise ConfigurationError("JWT_SECRET must be set.")
    if not config.JWT_ISSUER or not config.JWT_AUDIENCE:
        raise ConfigurationError("JWT_ISSUER and JWT_AUDIENCE must be set.")
    if config.JWT_ACCESS_TTL_MINUTES < 1:
        raise ConfigurationError("JWT_ACCESS_TTL_MINUTES must be >= 1.")
    if config.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    for credential in config.AUTH_STATIC_USERS:
        if credential.role not in {"admin", "user"}:
            raise ConfigurationError(f"Unsupported static user role: {credential.role}")
    if config.is_production:
        if len(config.JWT_SECRET) < MIN_PRODUCTION_SECRET_LENGTH:
            raise ConfigurationError(
                f"Production JWT_SECRET must be at least {MIN_PRODUCTION_SECRET_LENGTH} characters."
            )
        if "change_me" in config.JWT_SECRET.lower() or "change_me" in config.DATABASE_URL.lower():
            raise ConfigurationError("Production configuration uses placeholder values.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)
