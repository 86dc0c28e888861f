"""Refresh token ledger interface - domain layer abstraction.

The ledger is an append-only table of issued refresh tokens keyed by a
one-way hash of the token value. It supports:
1. Recording a newly issued refresh token
2. Looking an entry up by hash when the token is presented
3. Revoking an entry exactly once (rotation and logout)
"""

from abc import ABC, abstractmethod
from datetime import datetime

from app.domain.entities.refresh_token import RefreshTokenEntry


class IRefreshTokenRepository(ABC):
    """
    Interface for refresh token ledger storage.

    Revocation must be a conditional update ("set revoked_at where it is
    still null") that reports whether this call was the one that revoked
    the row. Concurrent rotations of the same token rely on it: exactly one
    caller sees ``True``.
    """

    @abstractmethod
    async def add(self, entry: RefreshTokenEntry) -> RefreshTokenEntry:
        """
        Insert a new ledger entry.

        Args:
            entry: Entry to persist (token_id is assigned by storage)

        Returns:
            The stored entry with token_id populated

        Example:
            stored = await uow.refresh_tokens.add(RefreshTokenEntry(
                subject_type=SubjectType.USER,
                subject_id=42,
                token_hash=hash_refresh_token(refresh_token),
                expires_at=datetime.now(UTC) + timedelta(days=7),
            ))
        """
        pass

    @abstractmethod
    async def get_by_hash(self, token_hash: str) -> RefreshTokenEntry | None:
        """
        Retrieve a ledger entry by token hash.

        Args:
            token_hash: SHA-256 hex digest of the presented refresh token

        Returns:
            RefreshTokenEntry if found, None otherwise
        """
        pass

    @abstractmethod
    async def revoke(self, token_id: int, revoked_at: datetime) -> bool:
        """
        Revoke an entry by id if it is not revoked yet.

        Args:
            token_id: Ledger entry identifier
            revoked_at: Revocation timestamp to record

        Returns:
            True if this call revoked the entry, False if it was already
            revoked or does not exist
        """
        pass

    @abstractmethod
    async def revoke_by_hash(self, token_hash: str, revoked_at: datetime) -> bool:
        """
        Revoke an entry by token hash if it is not revoked yet.

        Args:
            token_hash: SHA-256 hex digest of the refresh token
            revoked_at: Revocation timestamp to record

        Returns:
            True if this call revoked the entry, False otherwise

        Example:
            # Logout never fails visibly, the result is informational only
            await uow.refresh_tokens.revoke_by_hash(token_hash, datetime.now(UTC))
        """
        pass
