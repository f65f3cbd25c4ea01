"""Auth schema module."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, Field

from fleet.schemas.common import CamelModel


class LoginRequest(CamelModel):
    username: str = Field(default="", validation_alias=AliasChoices("username", "email", "identifier"))
    password: str = Field(default="", validation_alias=AliasChoices("password", "secret"), max_length=256)


class TokenResponse(CamelModel):
    token: str
    type: str = "Bearer"
    expires_in: int
    username: str


class CurrentUserResponse(CamelModel):
    subject: str
    name: str
    role: str
    token_id: str
    expires_at: datetime
    message: str
