"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from fleet.api.v1 import auth, health
from fleet.api.v1.crud import build_crud_router
from fleet.resources import RESOURCES


def get_api_router(prefix: str = "/api/v1") -> APIRouter:
    api_router = APIRouter(prefix=prefix)
    api_router.include_router(health.router)
    api_router.include_router(auth.router)
    for resource in RESOURCES:
        api_router.include_router(build_crud_router(resource))
    return api_router
