"""SQLAlchemy model package for the fleet schema."""

from fleet.models.base import Base
from fleet.models.enums import UserRole, VehicleModel
from fleet.models.maintenance_history import MaintenanceHistory
from fleet.models.user import User
from fleet.models.vehicle import Vehicle

__all__ = [
    "Base",
    "MaintenanceHistory",
    "User",
    "UserRole",
    "Vehicle",
    "VehicleModel",
]
