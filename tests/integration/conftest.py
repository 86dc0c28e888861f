"""Integration test fixtures.

Provides fixtures for integration testing with real database and FastAPI client.
Uses SQLite in-memory database for fast, isolated tests.
"""

from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from pwdlib.hashers.bcrypt import BcryptHasher
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.infrastructure.config.settings import Settings, get_settings
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models import (
    ModeratorModel,
    OrganizationModel,
    UserModel,
)
from app.infrastructure.security.pwdlib_password_hasher import PwdlibPasswordHasher
from app.main import app
from app.presentation.dependencies import get_session_factory
from tests.conftest import ACCESS_SECRET, REFRESH_SECRET

# Test database URL (SQLite in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

USER_PASSWORD = "user-password-123"
ORGANIZATION_PASSWORD = "org-password-123"
MODERATOR_PASSWORD = "mod-password-123"


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine]:
    """Create a test database engine using SQLite in-memory."""
    # StaticPool keeps one connection so every session sees the same database
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables after test
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(test_engine: AsyncEngine):
    """Create a test session factory."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def seeded_subjects(test_session_factory) -> None:
    """
    Seed one subject of each kind, plus inactive, passwordless and
    special-use-domain accounts.

    The moderator carries a bcrypt hash as written by the existing admin
    tooling; everyone else gets an Argon2 hash.
    """
    hasher = PwdlibPasswordHasher()
    legacy_bcrypt = BcryptHasher(rounds=4)

    async with test_session_factory() as session:
        session.add_all(
            [
                ModeratorModel(
                    moderator_id=1,
                    user_name="mod01",
                    password=legacy_bcrypt.hash(MODERATOR_PASSWORD),
                ),
                OrganizationModel(
                    organization_id=5,
                    name="Example Org",
                    email="org@example.com",
                    password=hasher.hash(ORGANIZATION_PASSWORD),
                    active_status=1,
                ),
                OrganizationModel(
                    organization_id=6,
                    name="Closed Org",
                    email="closed@example.com",
                    password=hasher.hash(ORGANIZATION_PASSWORD),
                    active_status=0,
                ),
                OrganizationModel(
                    organization_id=8,
                    name="New Org",
                    email="new@example.com",
                    password=None,
                    active_status=1,
                ),
                UserModel(
                    user_id=42,
                    organization_id=5,
                    group_id=3,
                    email="user@example.com",
                    license="LIC-001",
                    password=hasher.hash(USER_PASSWORD),
                    active_status=1,
                ),
                UserModel(
                    user_id=43,
                    organization_id=5,
                    group_id=3,
                    email="inactive@example.com",
                    license="LIC-002",
                    password=hasher.hash(USER_PASSWORD),
                    active_status=0,
                ),
                UserModel(
                    user_id=44,
                    organization_id=5,
                    group_id=4,
                    email="staff@corp.local",
                    license="LIC-003",
                    password=hasher.hash(USER_PASSWORD),
                    active_status=1,
                ),
            ]
        )
        await session.commit()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with both signing secrets configured."""
    return Settings(
        access_token_secret=ACCESS_SECRET,
        refresh_token_secret=REFRESH_SECRET,
        access_token_expires_in="15m",
        refresh_token_expires_days=7,
        environment="test",
        _env_file=None,
    )


@pytest.fixture
def client(test_session_factory, seeded_subjects, test_settings) -> Generator[TestClient]:
    """
    Create a FastAPI test client with test database.

    This client uses the real application but with an in-memory database.
    """

    # Override the session factory and settings dependencies
    def override_get_session_factory():
        return test_session_factory

    app.dependency_overrides[get_session_factory] = override_get_session_factory
    app.dependency_overrides[get_settings] = lambda: test_settings

    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()
