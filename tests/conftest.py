"""Pytest configuration and fixtures.

These fixtures follow the Dependency Inversion Principle:
- Use fake implementations (FakePasswordHasher, FakeUnitOfWork)
- Use the real JWT codec (signing is fast and deterministic enough)
- Each test gets fresh fakes
"""

from datetime import timedelta

import pytest

from app.application.services.auth_service import AuthService
from app.application.services.session_service import SessionService
from app.domain.entities.subject import Subject, SubjectType
from app.domain.services.token_codec import TokenConfig
from app.infrastructure.security.jwt_token_codec import JWTTokenCodec
from tests.fakes.password_hasher_fake import FakePasswordHasher
from tests.fakes.unit_of_work_fake import FakeUnitOfWork

ACCESS_SECRET = "access-secret-" + "a" * 32
REFRESH_SECRET = "refresh-secret-" + "r" * 32


@pytest.fixture
def token_config() -> TokenConfig:
    """Token configuration with two distinct secrets."""
    return TokenConfig(
        access_token_secret=ACCESS_SECRET,
        refresh_token_secret=REFRESH_SECRET,
        access_token_ttl=timedelta(minutes=15),
        refresh_token_days=7,
    )


@pytest.fixture
def token_codec(token_config) -> JWTTokenCodec:
    return JWTTokenCodec(token_config)


@pytest.fixture
def fake_password_hasher() -> FakePasswordHasher:
    return FakePasswordHasher()


@pytest.fixture
def sample_user() -> Subject:
    """
    A user subject. The password_hash uses the FakePasswordHasher format.
    """
    return Subject(
        subject_type=SubjectType.USER,
        subject_id=42,
        login="user@example.com",
        password_hash="HASHED:password123",
        organization_id=7,
        group_id=3,
        license="LIC-001",
    )


@pytest.fixture
def sample_moderator() -> Subject:
    return Subject(
        subject_type=SubjectType.MODERATOR,
        subject_id=1,
        login="mod01",
        password_hash="HASHED:modpassword",
    )


@pytest.fixture
def sample_organization() -> Subject:
    return Subject(
        subject_type=SubjectType.ORGANIZATION,
        subject_id=5,
        login="org@example.com",
        password_hash="HASHED:orgpassword",
        name="Example Org",
    )


@pytest.fixture
def fake_uow(sample_user, sample_moderator, sample_organization) -> FakeUnitOfWork:
    """
    Provide a FakeUnitOfWork pre-populated with one subject of each type.

    The same instance is returned by every uow_factory call so state
    persists across units of work.
    """
    return FakeUnitOfWork(
        initial_subjects=[sample_user, sample_moderator, sample_organization]
    )


@pytest.fixture
def session_service(fake_uow, token_codec, token_config) -> SessionService:
    """Provide a SessionService backed by the in-memory ledger."""

    def uow_factory():
        return fake_uow

    return SessionService(
        uow_factory=uow_factory,
        token_codec=token_codec,
        config=token_config,
    )


@pytest.fixture
def auth_service(fake_uow, session_service, token_codec, fake_password_hasher) -> AuthService:
    """Provide AuthService with fake dependencies."""

    def uow_factory():
        return fake_uow

    return AuthService(
        uow_factory=uow_factory,
        session_service=session_service,
        token_codec=token_codec,
        password_hasher=fake_password_hasher,
        access_token_expires_in=15 * 60,
    )
