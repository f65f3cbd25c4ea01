"""Dependency health checks aggregated for the ``/health`` endpoint."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from fleet.database.db import ping

logger = logging.getLogger(__name__)

HEALTHY = "Healthy"
UNHEALTHY = "Unhealthy"

HealthCheck = Callable[[], str]


@dataclass(frozen=True)
class CheckResult:
    name: str
    status: str
    description: str
    duration_ms: float
    exception: str | None = None


@dataclass(frozen=True)
class HealthReport:
    status: str
    timestamp: datetime
    duration_ms: float
    checks: list[CheckResult]

    @property
    def is_healthy(self) -> bool:
        return self.status == HEALTHY

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "timestamp": self.timestamp.isoformat(),
            "durationMs": self.duration_ms,
            "checks": [
                {
                    "name": check.name,
                    "status": check.status,
                    "description": check.description,
                    "durationMs": check.duration_ms,
                    "exception": check.exception,
                }
                for check in self.checks
            ],
        }


def database_check(db: Session) -> HealthCheck:
    def check() -> str:
        ping(db)
        return "Database reachable."

    return check


def run_health_checks(checks: dict[str, HealthCheck]) -> HealthReport:
    """Run every check; any failure marks the whole report unhealthy."""
    started = time.perf_counter()
    results: list[CheckResult] = []
    for name, check in checks.items():
        check_started = time.perf_counter()
        try:
            description = check()
            status = HEALTHY
            error = None
        except Exception as exc:
            description = f"{name} check failed."
            status = UNHEALTHY
            error = exc.__class__.__name__
            logger.warning(
                "health.check.failed",
                extra={"event": "health.check.failed", "check": name, "error": str(exc)},
            )
        results.append(
            CheckResult(
                name=name,
                status=status,
                description=description,
                duration_ms=round((time.perf_counter() - check_started) * 1000, 2),
                exception=error,
            )
        )

    overall = HEALTHY if all(result.status == HEALTHY for result in results) else UNHEALTHY
    return HealthReport(
        status=overall,
        timestamp=datetime.now(timezone.utc),
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
        checks=results,
    )
