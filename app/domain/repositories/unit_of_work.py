"""Unit of Work interface - domain layer."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.repositories.refresh_token_repository import IRefreshTokenRepository
    from app.domain.repositories.subject_repository import ISubjectRepository


class IUnitOfWork(ABC):
    """
    Unit of Work interface for managing transactions.

    The UoW acts as a facade providing access to all repositories
    within a single transactional boundary. Ledger writes are committed
    one statement per unit of work, so a crash between revoking a token
    and inserting its replacement leaves the old token revoked.
    """

    subjects: "ISubjectRepository"
    refresh_tokens: "IRefreshTokenRepository"

    @abstractmethod
    async def __aenter__(self) -> "IUnitOfWork":
        """
        Enter async context manager.

        This is where the implementation would start a database
        transaction/session.
        """
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """
        Exit async context manager.

        Rolls back if an exception escaped the block. Work that was not
        committed explicitly is discarded.
        """
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commit the current transaction."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the current transaction."""
        pass
