"""Unit of Work implementation using SQLAlchemy."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.domain.repositories.unit_of_work import IUnitOfWork
from app.infrastructure.repositories.refresh_token_repository_impl import RefreshTokenRepository
from app.infrastructure.repositories.subject_repository_impl import SubjectRepository


class UnitOfWork(IUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work.

    This class:
    1. Manages the SQLAlchemy async session lifecycle
    2. Provides access to the subject store and the refresh token ledger
    3. Ensures both repositories share the same session
    4. Rolls back when the block raises; commits only when asked
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """
        Initialize UoW with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    async def __aenter__(self) -> "UnitOfWork":
        """
        Start a new database session and initialize repositories.

        Returns:
            Self for context manager usage
        """
        self._session = self._session_factory()

        self.subjects = SubjectRepository(self._session)
        self.refresh_tokens = RefreshTokenRepository(self._session)

        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """
        Exit context manager, rolling back on error.

        Uncommitted work is discarded when the session closes.
        """
        if exc_type is not None:
            await self.rollback()

        # Always close the session
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session is None:
            raise RuntimeError("Cannot commit: no active session")

        await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session is None:
            raise RuntimeError("Cannot rollback: no active session")

        await self._session.rollback()
