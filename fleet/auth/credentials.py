"""Credential validation against the static allow-list and stored users."""

from __future__ import annotations

import hmac
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from fleet.auth.identity import Identity
from fleet.core.config import StaticCredential
from fleet.core.exceptions import AuthenticationError, ValidationError
from fleet.core.security import verify_password
from fleet.models.enums import UserRole
from fleet.models.user import User

logger = logging.getLogger(__name__)

STATIC_ROLE_MAP = {
    "admin": UserRole.ADMIN,
    "user": UserRole.CLIENT,
}


class StaticCredentialStore:
    """Fixed username/secret pairs supplied through configuration."""

    def __init__(self, credentials: tuple[StaticCredential, ...] | list[StaticCredential]) -> None:
        self._credentials = {credential.username: credential for credential in credentials}

    def lookup(self, identifier: str, secret: str) -> Identity | None:
        credential = self._credentials.get(identifier)
        if credential is None:
            return None
        if not hmac.compare_digest(credential.secret.encode("utf-8"), secret.encode("utf-8")):
            return None
        return Identity(subject=credential.username, name=credential.username, role=STATIC_ROLE_MAP[credential.role])


class UserCredentialStore:
    """Users table lookup by exact email with salted-hash password check."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def lookup(self, identifier: str, secret: str) -> Identity | None:
        user = self.db.execute(select(User).where(User.email == identifier)).scalar_one_or_none()
        if user is None or not verify_password(secret, user.password_hash):
            return None
        return Identity(subject=str(user.user_id), name=user.email, role=user.type)


class CredentialValidator:
    """Resolve an identity from the first store that accepts the credentials."""

    def __init__(self, stores: list[StaticCredentialStore | UserCredentialStore]) -> None:
        self.stores = stores

    def validate(self, identifier: str, secret: str) -> Identity:
        if not identifier or not secret:
            raise ValidationError("Username and password are required.")

        for store in self.stores:
            identity = store.lookup(identifier, secret)
            if identity is not None:
                logger.info(
                    "auth.login.succeeded",
                    extra={"event": "auth.login.succeeded", "subject": identity.subject, "role": identity.role.value},
                )
                return identity

        logger.warning("auth.login.failed", extra={"event": "auth.login.failed"})
        raise AuthenticationError("Invalid credentials.")
