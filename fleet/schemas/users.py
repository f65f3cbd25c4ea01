"""User request/response schemas for API contracts."""

from __future__ import annotations

import uuid

from pydantic import Field, field_validator

from fleet.models.enums import UserRole
from fleet.schemas.common import CamelModel, ResourceResponse


class UserCreateRequest(CamelModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=8, max_length=100)
    type: UserRole

    @field_validator("email")
    @classmethod
    def email_has_domain(cls, value: str) -> str:
        value = value.strip()
        local, _, domain = value.partition("@")
        if not local or "." not in domain:
            raise ValueError("invalid email address")
        return value


class UserUpdateRequest(UserCreateRequest):
    user_id: uuid.UUID


class UserResponse(ResourceResponse):
    """Public user view; the password hash is never serialised."""

    user_id: uuid.UUID
    email: str
    type: UserRole
