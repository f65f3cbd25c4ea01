"""Vehicle request/response schemas for API contracts."""

from __future__ import annotations

import uuid

from pydantic import Field

from fleet.models.enums import VehicleModel
from fleet.schemas.common import CamelModel, ResourceResponse


class VehicleCreateRequest(CamelModel):
    license_plate: str = Field(min_length=1, max_length=8)
    vehicle_model: VehicleModel
    is_cancel: bool = False
    user_cancel_id: uuid.UUID | None = None


class VehicleUpdateRequest(VehicleCreateRequest):
    vehicle_id: uuid.UUID


class VehicleResponse(ResourceResponse):
    vehicle_id: uuid.UUID
    license_plate: str
    vehicle_model: VehicleModel
    is_cancel: bool
    user_cancel_id: uuid.UUID | None = None
