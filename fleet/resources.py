"""Resource descriptors shared by the CRUD service and the CRUD router factory."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from fleet.core.security import hash_password
from fleet.models import MaintenanceHistory, User, Vehicle
from fleet.schemas.maintenance_histories import (
    MaintenanceHistoryCreateRequest,
    MaintenanceHistoryResponse,
    MaintenanceHistoryUpdateRequest,
)
from fleet.schemas.users import UserCreateRequest, UserResponse, UserUpdateRequest
from fleet.schemas.vehicles import VehicleCreateRequest, VehicleResponse, VehicleUpdateRequest


def _unchanged(values: dict[str, Any]) -> dict[str, Any]:
    return values


@dataclass(frozen=True)
class ResourceSpec:
    """Capabilities a persisted entity brings to the generic CRUD layer.

    ``name`` drives route names (``list_<name>``, ``get_<name>``, ...),
    ``id_field`` is both the primary key attribute and the body field that
    must match the path id on update, and ``prepare`` maps validated request
    values onto model columns.
    """

    name: str
    path: str
    tag: str
    model: type
    id_field: str
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    response_schema: type[BaseModel]
    scope_prefix: str
    order_by: str
    prepare: Callable[[dict[str, Any]], dict[str, Any]] = field(default=_unchanged)

    @property
    def read_scope(self) -> str:
        return f"{self.scope_prefix}.read"

    @property
    def write_scope(self) -> str:
        return f"{self.scope_prefix}.write"

    def identifier_of(self, entity: Any) -> Any:
        return getattr(entity, self.id_field)


def _hash_user_password(values: dict[str, Any]) -> dict[str, Any]:
    prepared = dict(values)
    password = prepared.pop("password", None)
    if password is not None:
        prepared["password_hash"] = hash_password(password)
    return prepared


VEHICLES = ResourceSpec(
    name="vehicle",
    path="/vehicles",
    tag="vehicles",
    model=Vehicle,
    id_field="vehicle_id",
    create_schema=VehicleCreateRequest,
    update_schema=VehicleUpdateRequest,
    response_schema=VehicleResponse,
    scope_prefix="vehicles",
    order_by="license_plate",
)

USERS = ResourceSpec(
    name="user",
    path="/users",
    tag="users",
    model=User,
    id_field="user_id",
    create_schema=UserCreateRequest,
    update_schema=UserUpdateRequest,
    response_schema=UserResponse,
    scope_prefix="users",
    order_by="email",
    prepare=_hash_user_password,
)

MAINTENANCE_HISTORIES = ResourceSpec(
    name="maintenance_history",
    path="/maintenance-histories",
    tag="maintenance-histories",
    model=MaintenanceHistory,
    id_field="maintenance_history_id",
    create_schema=MaintenanceHistoryCreateRequest,
    update_schema=MaintenanceHistoryUpdateRequest,
    response_schema=MaintenanceHistoryResponse,
    scope_prefix="maintenance_histories",
    order_by="maintenance_date",
)

RESOURCES: tuple[ResourceSpec, ...] = (VEHICLES, USERS, MAINTENANCE_HISTORIES)
