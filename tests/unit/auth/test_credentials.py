from __future__ import annotations

import pytest

from fleet.auth.credentials import CredentialValidator, StaticCredentialStore, UserCredentialStore
from fleet.core.config import parse_static_users
from fleet.core.exceptions import AuthenticationError, ValidationError
from fleet.core.security import hash_password
from fleet.models import User, UserRole

STATIC_USERS = parse_static_users("admin:admin123:admin,user:user123:user")


def test_static_store_maps_roles():
    store = StaticCredentialStore(STATIC_USERS)

    admin = store.lookup("admin", "admin123")
    assert admin is not None
    assert admin.role is UserRole.ADMIN
    assert admin.subject == "admin"

    client = store.lookup("user", "user123")
    assert client is not None
    assert client.role is UserRole.CLIENT


def test_static_store_rejects_wrong_secret_and_unknown_user():
    store = StaticCredentialStore(STATIC_USERS)
    assert store.lookup("admin", "admin1234") is None
    assert store.lookup("admin", "ADMIN123") is None
    assert store.lookup("root", "admin123") is None


def test_user_store_checks_hashed_password(db_session):
    user = User(email="driver@fleet.test", password_hash=hash_password("s3cret-pass", iterations=1000), type=UserRole.CLIENT)
    db_session.add(user)
    db_session.commit()

    store = UserCredentialStore(db_session)
    identity = store.lookup("driver@fleet.test", "s3cret-pass")
    assert identity is not None
    assert identity.subject == str(user.user_id)
    assert identity.name == "driver@fleet.test"
    assert identity.role is UserRole.CLIENT

    assert store.lookup("driver@fleet.test", "wrong-pass") is None
    assert store.lookup("nobody@fleet.test", "s3cret-pass") is None


def test_validator_tries_stores_in_order(db_session):
    validator = CredentialValidator([StaticCredentialStore(STATIC_USERS), UserCredentialStore(db_session)])
    assert validator.validate("admin", "admin123").role is UserRole.ADMIN

    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        validator.validate("admin", "nope")


def test_validator_requires_both_fields():
    validator = CredentialValidator([StaticCredentialStore(STATIC_USERS)])
    with pytest.raises(ValidationError):
        validator.validate("", "admin123")
    with pytest.raises(ValidationError):
        validator.validate("admin", "")
