"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging

from fleet.core.config import Config, get_config
from fleet.core.logging_config import configure_logging
from fleet.database.db import bind_database, get_active_database_url, get_engine, verify_database_connection
from fleet.models import Base

logger = logging.getLogger(__name__)


def validate_startup_config(config: Config | None = None) -> bool:
    """Fail-fast config and connectivity checks; returns database reachability."""
    config = config or get_config()
    database_ok = verify_database_connection()
    active_database_url = get_active_database_url()
    if not database_ok and config.DB_CONNECTIVITY_REQUIRED:
        raise RuntimeError("Database connectivity check failed.")
    if not database_ok:
        logger.warning(
            "startup.database.connectivity_optional_failed",
            extra={"event": "startup.database.connectivity_optional_failed"},
        )

    if config.is_production and active_database_url.startswith("sqlite"):
        logger.warning(
            "startup.production.sqlite_detected",
            extra={"event": "startup.production.sqlite_detected"},
        )

    logger.info(
        "startup.config.validated",
        extra={
            "event": "startup.config.validated",
            "env": config.ENV,
            "database_url_scheme": active_database_url.split("://", 1)[0],
            "db_connectivity_required": config.DB_CONNECTIVITY_REQUIRED,
        },
    )
    return database_ok


def init_db() -> None:
    """Create any missing tables on the active engine."""
    Base.metadata.create_all(bind=get_engine())
    logger.info(
        "database.tables.created",
        extra={"event": "database.tables.created", "database_url_scheme": get_active_database_url().split("://", 1)[0]},
    )


def bootstrap(config: Config | None = None) -> None:
    """Initialize logging, bind the database, validate settings and prepare the schema."""
    config = config or get_config()
    configure_logging(config)
    bind_database(config)
    if validate_startup_config(config):
        init_db()
