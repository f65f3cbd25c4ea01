"""Health endpoints: aggregated dependency checks plus readiness/liveness probes."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from fleet.core.config import Config
from fleet.core.dependencies import get_db_session, get_settings
from fleet.services.health_service import database_check, run_health_checks

router = APIRouter(prefix="/health", tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("")
def health(db: Session = Depends(get_db_session), cfg: Config = Depends(get_settings)) -> JSONResponse:
    report = run_health_checks({"database": database_check(db)})
    body = report.as_dict()
    body["version"] = cfg.APP_VERSION
    body["environment"] = cfg.ENV
    code = status.HTTP_200_OK if report.is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=code, content=body)


@router.get("/ready")
def ready() -> dict:
    return {"status": "Ready", "timestamp": _now()}


@router.get("/live")
def live() -> dict:
    return {"status": "Alive", "timestamp": _now()}
