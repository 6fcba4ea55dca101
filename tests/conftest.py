# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests (services against a temporary SQLite database)
- Integration tests (HTTP flows through the FastAPI TestClient)
"""

from collections.abc import AsyncIterator, Iterator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.app import create_app
from src.core.config.settings import (
    AdminSettings,
    AuthSettings,
    BootstrapSettings,
    DatabaseSettings,
    JWTSettings,
    RateLimitSettings,
    Settings,
)
from src.domains.auth.jwt import JWTManager
from src.domains.auth.password import PasswordHasher
from src.infrastructure.database.connection import build_engine, build_sessionmaker
from src.infrastructure.database.models import Base, User, UserRole

TEST_JWT_SECRET = "test-secret-key-for-jwt-testing"
SUPER_ADMIN_EMAIL = "root@example.com"
SUPER_ADMIN_PASSWORD = "root-password"

# Lowest bcrypt cost keeps the suite fast
TEST_BCRYPT_ROUNDS = 4


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Provide settings backed by a per-test SQLite database.

    Returns:
        Settings with rate limiting off and a bootstrap super admin.
    """
    return Settings(
        environment="development",
        debug=True,
        database=DatabaseSettings(dsn=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"),
        jwt=JWTSettings(secret_key=SecretStr(TEST_JWT_SECRET)),
        auth=AuthSettings(bcrypt_rounds=TEST_BCRYPT_ROUNDS),
        admin=AdminSettings(allow_escalation=False),
        rate_limit=RateLimitSettings(enabled=False),
        bootstrap=BootstrapSettings(
            super_admin_email=SUPER_ADMIN_EMAIL,
            super_admin_password=SecretStr(SUPER_ADMIN_PASSWORD),
            super_admin_name="Root Admin",
            super_admin_phone="555-0000",
        ),
    )


@pytest.fixture
def jwt_manager(settings: Settings) -> JWTManager:
    """Create JWT manager with test settings."""
    return JWTManager(settings.jwt)


@pytest.fixture
def password_hasher() -> PasswordHasher:
    """Create a fast password hasher."""
    return PasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def db_session(settings: Settings) -> AsyncIterator[AsyncSession]:
    """Provide a session on a freshly created schema."""
    engine = build_engine(settings)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with build_sessionmaker(engine)() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def make_user(db_session: AsyncSession, password_hasher: PasswordHasher):
    """Factory inserting a user row directly.

    Returns:
        Async callable creating and committing a User.
    """

    async def _make_user(
        email: str,
        role: UserRole = UserRole.STUDENT,
        password: str = "password123",
        is_approved: bool = True,
        is_active: bool = True,
        full_name: str = "Test User",
        phone: str = "555-0100",
    ) -> User:
        user = User(
            full_name=full_name,
            email=email,
            phone=phone,
            password_hash=password_hasher.hash(password),
            role=role,
            is_approved=is_approved,
            is_active=is_active,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


# =============================================================================
# HTTP Fixtures
# =============================================================================


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """Provide a TestClient with the lifespan running.

    Startup creates the schema and the bootstrap super admin.
    """
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


def _bearer_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def bearer():
    """Build an Authorization header for a bearer token.

    Returns:
        Callable mapping a token to a headers dict.
    """
    return _bearer_header


@pytest.fixture
def login_as(client: TestClient):
    """Log in through the API.

    Returns:
        Callable taking email and password and returning the token.
    """

    def _login(email: str, password: str) -> str:
        response = client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()["token"]

    return _login


@pytest.fixture
def super_admin_token(login_as) -> str:
    """Token of the bootstrap super admin."""
    return login_as(SUPER_ADMIN_EMAIL, SUPER_ADMIN_PASSWORD)


@pytest.fixture
def admin_credentials(client: TestClient, super_admin_token: str) -> dict[str, Any]:
    """Create a plain admin through the API.

    Returns:
        Dict with the admin's id, email and password.
    """
    response = client.post(
        "/admin/create-admin",
        json={
            "full_name": "Plain Admin",
            "email": "admin@example.com",
            "phone": "555-0101",
            "password": "admin-password",
        },
        headers=_bearer_header(super_admin_token),
    )
    assert response.status_code == 201, response.text
    return {
        "id": response.json()["user"]["id"],
        "email": "admin@example.com",
        "password": "admin-password",
    }


@pytest.fixture
def admin_token(login_as, admin_credentials: dict[str, Any]) -> str:
    """Token of a plain admin."""
    return login_as(admin_credentials["email"], admin_credentials["password"])


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
