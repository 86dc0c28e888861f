"""FastAPI dependency injection setup.

This module is the COMPOSITION ROOT - where we wire up dependencies.

This is where we decide:
- Use JWTTokenCodec (PyJWT) for bearer tokens
- Use PwdlibPasswordHasher (Argon2 + bcrypt) for subject passwords
- Use UnitOfWork with SQLAlchemy for the credential store and the ledger
- Use Settings from environment for secrets and lifetimes

The application layer doesn't know about these choices - it only knows
about interfaces.
"""

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from app.application.dtos.auth_dto import CurrentSubjectDTO
from app.application.exceptions import InvalidTokenError
from app.application.services.auth_service import AuthService
from app.application.services.session_service import SessionService
from app.domain.repositories.unit_of_work import IUnitOfWork
from app.domain.services.password_hasher import IPasswordHasher
from app.domain.services.token_codec import ITokenCodec
from app.infrastructure.config.settings import Settings, get_settings
from app.infrastructure.persistence.database import (
    create_database_engine,
    create_session_factory,
)
from app.infrastructure.repositories.unit_of_work_impl import UnitOfWork
from app.infrastructure.security.jwt_token_codec import JWTTokenCodec
from app.infrastructure.security.pwdlib_password_hasher import PwdlibPasswordHasher

logger = logging.getLogger(__name__)

# Module-level singletons (created once, reused throughout app lifecycle)
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker | None = None
_password_hasher: IPasswordHasher | None = None


def get_database_engine(settings: Settings = Depends(get_settings)) -> AsyncEngine:
    """Get or create database engine singleton.

    Args:
        settings: Application settings (injected)

    Returns:
        AsyncEngine instance
    """
    global _engine
    if _engine is None:
        _engine = create_database_engine(settings)
    return _engine


def get_session_factory(
    engine: AsyncEngine = Depends(get_database_engine),
) -> async_sessionmaker:
    """Get or create session factory singleton.

    Overridden in integration tests to point at SQLite.

    Args:
        engine: Database engine (injected)

    Returns:
        Session factory
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(engine)
    return _session_factory


def get_password_hasher() -> IPasswordHasher:
    """
    Dependency that provides password hasher.

    This is a SINGLETON - password hashers are stateless and thread-safe.

    Note:
        In tests, this dependency can be overridden with FakePasswordHasher:

        app.dependency_overrides[get_password_hasher] = lambda: FakePasswordHasher()
    """
    global _password_hasher
    if _password_hasher is None:
        _password_hasher = PwdlibPasswordHasher()
    return _password_hasher


def get_token_codec(settings: Settings = Depends(get_settings)) -> ITokenCodec:
    """
    Dependency that provides the token codec.

    Args:
        settings: Application settings (injected)

    Returns:
        ITokenCodec implementation (JWTTokenCodec in production)
    """
    return JWTTokenCodec(settings.token_config)


def get_session_service(
    token_codec: ITokenCodec = Depends(get_token_codec),
    session_factory: async_sessionmaker = Depends(get_session_factory),
    settings: Settings = Depends(get_settings),
) -> SessionService:
    """
    Dependency that provides the session lifecycle service.

    Dependency Graph:
        get_session_service()
            → get_token_codec() → Settings.token_config
            → get_session_factory() → get_database_engine() → Settings
    """

    def uow_factory() -> IUnitOfWork:
        return UnitOfWork(session_factory)

    return SessionService(
        uow_factory=uow_factory,
        token_codec=token_codec,
        config=settings.token_config,
    )


def get_auth_service(
    session_service: SessionService = Depends(get_session_service),
    token_codec: ITokenCodec = Depends(get_token_codec),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
    session_factory: async_sessionmaker = Depends(get_session_factory),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    """
    Dependency that provides AuthService.

    Returns:
        AuthService instance with all dependencies injected
    """

    def uow_factory() -> IUnitOfWork:
        return UnitOfWork(session_factory)

    return AuthService(
        uow_factory=uow_factory,
        session_service=session_service,
        token_codec=token_codec,
        password_hasher=password_hasher,
        access_token_expires_in=int(settings.access_token_ttl.total_seconds()),
    )


# auto_error=False allows us to return 401 instead of 403 when credentials are missing
security = HTTPBearer(auto_error=False)


async def get_current_subject(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> CurrentSubjectDTO:
    """
    Dependency that extracts and validates the current subject from a JWT.

    Usage in endpoints:
        @router.get("/me")
        async def get_me(current: CurrentSubjectDTO = Depends(get_current_subject)):
            return current

    Raises:
        InvalidTokenError: If token is missing/invalid/expired (401 via handler)
    """
    if credentials is None:
        raise InvalidTokenError("Missing authorization credentials")

    return await auth_service.get_current_subject(credentials.credentials)


async def dispose_database_engine() -> None:
    """Dispose the engine singleton on shutdown."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        logger.info("Database engine disposed")
    _engine = None
    _session_factory = None
