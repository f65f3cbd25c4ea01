"""Dependency providers for API handlers."""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from fleet.auth.credentials import CredentialValidator, StaticCredentialStore, UserCredentialStore
from fleet.auth.jwt import TokenService, TokenSettings
from fleet.core.config import Config
from fleet.core.exceptions import AuthenticationError
from fleet.database.db import get_db
from fleet.models.enums import UserRole


@dataclass(frozen=True)
class CurrentUser:
    subject: str
    name: str
    role: UserRole
    token_id: str
    expires_at: datetime
    claims: dict[str, Any]


def get_settings(request: Request) -> Config:
    """Return the configuration the running application was built with."""
    return request.app.state.config


def get_db_session() -> Generator[Session, None, None]:
    """Yield SQLAlchemy session for dependency injection."""
    yield from get_db()


def get_token_service(cfg: Config = Depends(get_settings)) -> TokenService:
    """Build the token service from the application configuration."""
    return TokenService(TokenSettings.from_config(cfg))


def get_credential_validator(
    db: Session = Depends(get_db_session),
    cfg: Config = Depends(get_settings),
) -> CredentialValidator:
    """Static allow-list first, then stored users."""
    return CredentialValidator([StaticCredentialStore(cfg.AUTH_STATIC_USERS), UserCredentialStore(db)])


def extract_bearer_token(authorization: str | None) -> str:
    if authorization is None or not authorization.strip():
        raise AuthenticationError("Authorization header is required.")
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise AuthenticationError("Authorization header must use Bearer token.")
    return parts[1].strip()


def get_current_user(token: str, tokens: TokenService) -> CurrentUser:
    """Resolve current user from a bearer token."""
    verified = tokens.verify(token)
    return CurrentUser(
        subject=verified.subject,
        name=verified.name,
        role=verified.role,
        token_id=verified.token_id,
        expires_at=verified.expires_at,
        claims=verified.claims,
    )
