"""Refresh token ledger implementation using SQLAlchemy.

The domain layer (IRefreshTokenRepository) defines WHAT the ledger does;
this implementation defines HOW, with plain parameterized statements.

Revocation is a single conditional UPDATE:

    UPDATE t_refresh_token SET revoked_at = :now
    WHERE token_id = :id AND revoked_at IS NULL

and the affected row count tells the caller whether it won. Two requests
rotating the same token at once cannot both see a count of one, so no
application-level locking is needed.
"""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities.refresh_token import RefreshTokenEntry
from app.domain.repositories.refresh_token_repository import IRefreshTokenRepository
from app.infrastructure.persistence.models.refresh_token_model import RefreshTokenModel


class RefreshTokenRepository(IRefreshTokenRepository):
    """SQLAlchemy implementation of IRefreshTokenRepository."""

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with a database session.

        Args:
            session: SQLAlchemy async session (managed by UoW)
        """
        self._session = session

    async def add(self, entry: RefreshTokenEntry) -> RefreshTokenEntry:
        """
        Insert a ledger entry.

        Note: We flush to get the generated token_id without committing;
        the unit of work owns the commit.
        """
        token_model = RefreshTokenModel.from_entity(entry)

        self._session.add(token_model)
        await self._session.flush()
        await self._session.refresh(token_model)

        return token_model.to_entity()

    async def get_by_hash(self, token_hash: str) -> RefreshTokenEntry | None:
        """Get a ledger entry by token hash."""
        result = await self._session.execute(
            select(RefreshTokenModel).where(RefreshTokenModel.token_hash == token_hash).limit(1)
        )
        token_model = result.scalar_one_or_none()

        if token_model is None:
            return None

        return token_model.to_entity()

    async def revoke(self, token_id: int, revoked_at: datetime) -> bool:
        """Revoke by id where not already revoked; True if this call did it."""
        result = await self._session.execute(
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.token_id == token_id,
                RefreshTokenModel.revoked_at.is_(None),
            )
            .values(revoked_at=revoked_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def revoke_by_hash(self, token_hash: str, revoked_at: datetime) -> bool:
        """Revoke by hash where not already revoked; True if this call did it."""
        result = await self._session.execute(
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.token_hash == token_hash,
                RefreshTokenModel.revoked_at.is_(None),
            )
            .values(revoked_at=revoked_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
