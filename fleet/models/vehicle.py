"""Vehicle model module."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Enum, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fleet.models.base import Base
from fleet.models.enums import VehicleModel


class Vehicle(Base):
    __tablename__ = "vehicles"
    __table_args__ = (Index("idx_vehicles_license_plate", "license_plate"),)

    vehicle_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    license_plate: Mapped[str] = mapped_column(String(8), nullable=False)
    vehicle_model: Mapped[VehicleModel] = mapped_column(Enum(VehicleModel), nullable=False)
    is_cancel: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    user_cancel_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
