"""Maintenance history model module."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fleet.models.base import Base


class MaintenanceHistory(Base):
    __tablename__ = "maintenance_histories"
    __table_args__ = (
        Index("idx_maintenance_histories_vehicle", "vehicle_id"),
        Index("idx_maintenance_histories_user", "user_id"),
    )

    maintenance_history_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    vehicle_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("vehicles.vehicle_id"), nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.user_id"), nullable=False)
    maintenance_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
