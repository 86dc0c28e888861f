"""Fake refresh token ledger for testing without a database.

Stores entries in memory and implements the same conditional revocation
contract as the SQLAlchemy ledger: revoke() reports True only for the call
that moved revoked_at from None to a timestamp.
"""

from dataclasses import replace
from datetime import datetime

from app.domain.entities.refresh_token import RefreshTokenEntry
from app.domain.repositories.refresh_token_repository import IRefreshTokenRepository


class FakeRefreshTokenRepository(IRefreshTokenRepository):
    """
    In-memory fake implementation of IRefreshTokenRepository.

    Usage:
        repo = FakeRefreshTokenRepository()
        stored = await repo.add(entry)
        assert repo.count() == 1
    """

    def __init__(self) -> None:
        self._entries: dict[int, RefreshTokenEntry] = {}
        self._next_id = 1
        self.fail_on_add = False

    async def add(self, entry: RefreshTokenEntry) -> RefreshTokenEntry:
        """Store entry in memory, enforcing the unique token hash."""
        if self.fail_on_add:
            raise RuntimeError("Simulated storage failure")

        if any(e.token_hash == entry.token_hash for e in self._entries.values()):
            raise ValueError("Duplicate token_hash")

        stored = replace(entry, token_id=self._next_id)
        self._entries[self._next_id] = stored
        self._next_id += 1

        return stored

    async def get_by_hash(self, token_hash: str) -> RefreshTokenEntry | None:
        """Get entry by token hash from memory."""
        for entry in self._entries.values():
            if entry.token_hash == token_hash:
                return entry
        return None

    async def revoke(self, token_id: int, revoked_at: datetime) -> bool:
        """Revoke entry by id if not revoked yet."""
        entry = self._entries.get(token_id)
        if entry is None or entry.revoked_at is not None:
            return False

        self._entries[token_id] = replace(entry, revoked_at=revoked_at)
        return True

    async def revoke_by_hash(self, token_hash: str, revoked_at: datetime) -> bool:
        """Revoke entry by hash if not revoked yet."""
        entry = await self.get_by_hash(token_hash)
        if entry is None or entry.token_id is None:
            return False

        return await self.revoke(entry.token_id, revoked_at)

    # Helper methods for testing

    def count(self) -> int:
        """Get total number of ledger entries (useful for assertions)."""
        return len(self._entries)

    def get_all(self) -> list[RefreshTokenEntry]:
        """Get all entries (useful for inspection in tests)."""
        return list(self._entries.values())

    def set_expires_at(self, token_hash: str, expires_at: datetime) -> None:
        """Move an entry's server-side expiry (for expiry tests)."""
        for token_id, entry in self._entries.items():
            if entry.token_hash == token_hash:
                self._entries[token_id] = replace(entry, expires_at=expires_at)
                return
        raise KeyError(token_hash)
