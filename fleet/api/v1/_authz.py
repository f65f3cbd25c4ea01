"""Shared authorization helpers for API v1 route modules."""

from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import Depends, Header

from fleet.auth.jwt import TokenService
from fleet.auth.rbac import require_scopes
from fleet.core.dependencies import CurrentUser, extract_bearer_token, get_current_user, get_token_service
from fleet.core.exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)


def authorize(authorization: str | None, scopes: list[str], tokens: TokenService) -> CurrentUser:
    token = extract_bearer_token(authorization)
    user = get_current_user(token=token, tokens=tokens)
    require_scopes(user.role, scopes)
    return user


def require(*scopes: str) -> Callable[..., CurrentUser]:
    """Build a dependency that verifies the bearer token and required scopes.

    Rejections propagate as ``AuthenticationError`` (401) or
    ``AuthorizationError`` (403) and are rendered by the app's error handlers.
    """

    def dependency(
        authorization: str | None = Header(default=None, alias="Authorization"),
        tokens: TokenService = Depends(get_token_service),
    ) -> CurrentUser:
        try:
            return authorize(authorization=authorization, scopes=list(scopes), tokens=tokens)
        except (AuthenticationError, AuthorizationError) as exc:
            logger.info(
                "auth.token.rejected",
                extra={"event": "auth.token.rejected", "reason": str(exc), "error_type": exc.__class__.__name__},
            )
            raise

    return dependency
