from __future__ import annotations

import os

os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-0123456789"
os.environ["JWT_ISSUER"] = "fleet-api-test"
os.environ["JWT_AUDIENCE"] = "fleet-api-test-clients"
os.environ["JWT_ACCESS_TTL_MINUTES"] = "60"
os.environ["AUTH_STATIC_USERS"] = "admin:admin123:admin,user:user123:user"
os.environ["LOG_FILE"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fleet.auth.identity import Identity
from fleet.core.dependencies import get_db_session, get_token_service
from fleet.main import app
from fleet.models import Base, UserRole


@pytest.fixture
def session_factory():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def _override_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db_session] = _override_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _build(role: UserRole = UserRole.ADMIN, subject: str = "admin") -> dict[str, str]:
        issued = get_token_service(app.state.config).issue(Identity(subject=subject, name=subject, role=role))
        return {"Authorization": f"Bearer {issued.token}"}

    return _build
