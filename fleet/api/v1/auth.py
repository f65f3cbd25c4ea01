"""Auth endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from fleet.api.v1._authz import require
from fleet.auth.credentials import CredentialValidator
from fleet.auth.jwt import TokenService
from fleet.core.dependencies import CurrentUser, get_credential_validator, get_token_service
from fleet.core.exceptions import ValidationError
from fleet.schemas.auth import CurrentUserResponse, LoginRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    validator: CredentialValidator = Depends(get_credential_validator),
    tokens: TokenService = Depends(get_token_service),
) -> TokenResponse:
    username = payload.username.strip()
    if not username or not payload.password.strip():
        raise ValidationError("Username and password are required.")

    identity = validator.validate(username, payload.password)
    issued = tokens.issue(identity)
    return TokenResponse(
        token=issued.token,
        type=issued.token_type,
        expires_in=issued.expires_in,
        username=identity.name,
    )


@router.get("/me", response_model=CurrentUserResponse)
def me(user: CurrentUser = Depends(require())) -> CurrentUserResponse:
    return CurrentUserResponse(
        subject=user.subject,
        name=user.name,
        role=user.role.value,
        token_id=user.token_id,
        expires_at=user.expires_at,
        message=f"Hello, {user.name}! You reached a JWT-protected endpoint.",
    )
