"""Canonical enum values for the fleet schema."""

from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    CLIENT = "CLIENT"


class VehicleModel(str, enum.Enum):
    SPORT = "SPORT"
    POP = "POP"
    E = "E"
