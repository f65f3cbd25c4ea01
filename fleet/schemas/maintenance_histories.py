"""Maintenance history request/response schemas for API contracts."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import Field

from fleet.schemas.common import CamelModel, ResourceResponse


class MaintenanceHistoryCreateRequest(CamelModel):
    vehicle_id: uuid.UUID
    user_id: uuid.UUID
    maintenance_date: datetime
    description: str = Field(min_length=1, max_length=500)


class MaintenanceHistoryUpdateRequest(MaintenanceHistoryCreateRequest):
    maintenance_history_id: uuid.UUID


class MaintenanceHistoryResponse(ResourceResponse):
    maintenance_history_id: uuid.UUID
    vehicle_id: uuid.UUID
    user_id: uuid.UUID
    maintenance_date: datetime
    description: str
