"""Pydantic schema package for API contracts."""

from fleet.schemas.auth import CurrentUserResponse, LoginRequest, TokenResponse
from fleet.schemas.common import CamelModel, ErrorEnvelope, LinkDto, PagedResponse, ResourceResponse
from fleet.schemas.maintenance_histories import (
    MaintenanceHistoryCreateRequest,
    MaintenanceHistoryResponse,
    MaintenanceHistoryUpdateRequest,
)
from fleet.schemas.users import UserCreateRequest, UserResponse, UserUpdateRequest
from fleet.schemas.vehicles import VehicleCreateRequest, VehicleResponse, VehicleUpdateRequest

__all__ = [
    "CamelModel",
    "CurrentUserResponse",
    "ErrorEnvelope",
    "LinkDto",
    "LoginRequest",
    "MaintenanceHistoryCreateRequest",
    "MaintenanceHistoryResponse",
    "MaintenanceHistoryUpdateRequest",
    "PagedResponse",
    "ResourceResponse",
    "TokenResponse",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
    "VehicleCreateRequest",
    "VehicleResponse",
    "VehicleUpdateRequest",
]
