"""Database connection and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fleet.core.config import Config, get_config

logger = logging.getLogger(__name__)


def _is_in_memory_sqlite(database_url: str) -> bool:
    return database_url in {"sqlite://", "sqlite:///:memory:"}


def _echo_sql(config: Config) -> bool:
    return config.DEBUG and not config.is_production


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine with pool settings suited to the URL's backend."""
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if _is_in_memory_sqlite(database_url):
            # A single shared connection keeps the in-memory schema alive.
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **kwargs)

    return create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_size=10,
        max_overflow=20,
    )


def _configure_engine(database_url: str, echo: bool = False) -> None:
    global DATABASE_URL, engine, SessionLocal
    DATABASE_URL = database_url
    engine = build_engine(database_url, echo=echo)
    SessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


_default_config = get_config()
_configure_engine(_default_config.DATABASE_URL, echo=_echo_sql(_default_config))


def bind_database(config: Config) -> None:
    """Point the engine and session factory at ``config.DATABASE_URL``.

    A no-op when the URL is already bound, so the shared in-memory SQLite
    connection survives repeated startups.
    """
    if config.DATABASE_URL == DATABASE_URL:
        return
    engine.dispose()
    _configure_engine(config.DATABASE_URL, echo=_echo_sql(config))


def get_engine() -> Engine:
    """Return the active SQLAlchemy engine."""
    return engine


def get_active_database_url() -> str:
    """Return the currently bound database URL."""
    return DATABASE_URL


def get_db() -> Generator[Session, None, None]:
    """Yield a session for dependency injection contexts."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """Context-manager wrapper for safe DB session lifecycle."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ping(db: Session) -> None:
    """Round-trip a trivial statement; raises ``SQLAlchemyError`` when unreachable."""
    db.execute(text("SELECT 1"))


def verify_database_connection() -> bool:
    """Verify DB connectivity during startup."""
    try:
        with get_db_session() as db:
            ping(db)
        return True
    except SQLAlchemyError as exc:
        logger.error(
            "database.connection_failed",
            extra={"event": "database.connection_failed", "error": str(exc)},
        )
        return False
