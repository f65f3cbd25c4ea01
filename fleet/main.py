"""Application entrypoint for the fleet API."""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fleet.api.v1 import get_api_router, health
from fleet.core.config import Config, get_config
from fleet.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    FleetError,
    NotFoundError,
    ValidationError,
)
from fleet.core.startup import bootstrap
from fleet.schemas.common import ErrorEnvelope

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

ERROR_STATUS: dict[type[FleetError], tuple[int, str]] = {
    ValidationError: (status.HTTP_400_BAD_REQUEST, "validation_failed"),
    AuthenticationError: (status.HTTP_401_UNAUTHORIZED, "authentication_failed"),
    AuthorizationError: (status.HTTP_403_FORBIDDEN, "forbidden"),
    NotFoundError: (status.HTTP_404_NOT_FOUND, "not_found"),
}

HTTP_ERROR_CODES = {
    status.HTTP_401_UNAUTHORIZED: "authentication_failed",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
}


def _error_response(code: int, error_code: str, detail: object, headers: dict[str, str] | None = None) -> JSONResponse:
    envelope = ErrorEnvelope(error_code=error_code, detail=detail)
    return JSONResponse(
        status_code=code,
        content=jsonable_encoder(envelope.model_dump(by_alias=True)),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(FleetError)
    async def handle_fleet_error(request: Request, exc: FleetError) -> JSONResponse:
        code, error_code = next(
            (mapped for exc_type, mapped in ERROR_STATUS.items() if isinstance(exc, exc_type)),
            (status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error"),
        )
        if code == status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.exception("http.fleet_error.unmapped", extra={"event": "http.fleet_error.unmapped"})
            return _error_response(code, error_code, "Internal server error.")
        headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
        return _error_response(code, error_code, str(exc), headers=headers)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        error_code = HTTP_ERROR_CODES.get(exc.status_code, "http_error")
        return _error_response(exc.status_code, error_code, exc.detail, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
            for error in exc.errors()
        ]
        return _error_response(status.HTTP_400_BAD_REQUEST, "validation_failed", details)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "http.unhandled_exception",
            extra={"event": "http.unhandled_exception", "path": request.url.path},
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", "Internal server error.")


def access_log_fields(request: Request, request_id: str, status_code: int, duration_ms: float) -> dict[str, Any]:
    """Fields for the ``http.request.completed`` event; never carries headers or bodies."""
    return {
        "event": "http.request.completed",
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "duration_ms": duration_ms,
    }


def register_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        started = time.perf_counter()
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "http.request.completed",
            extra=access_log_fields(
                request,
                request_id,
                response.status_code,
                round((time.perf_counter() - started) * 1000, 2),
            ),
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    bootstrap(app.state.config)
    yield


def create_app(cfg: Config | None = None) -> FastAPI:
    """Create the FastAPI application bound to ``cfg`` (or the environment's config)."""
    cfg = cfg or get_config()
    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION, lifespan=lifespan)
    app.state.config = cfg
    register_exception_handlers(app)
    register_request_logging(app)
    # Probes answer at the root as well as under the versioned prefix.
    app.include_router(health.router)
    app.include_router(get_api_router(cfg.API_PREFIX))

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


# Expose ASGI app for `uvicorn fleet.main:app`.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run("fleet.main:app", host=config.API_HOST, port=config.API_PORT)
