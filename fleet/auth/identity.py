"""Authenticated principal shared by credential validation and token issuance."""

from __future__ import annotations

from dataclasses import dataclass

from fleet.models.enums import UserRole


@dataclass(frozen=True)
class Identity:
    subject: str
    name: str
    role: UserRole
