"""Refresh token ledger entry - domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from app.domain.entities.subject import SubjectType
from app.domain.exceptions import InvalidEntityStateException

TOKEN_HASH_LENGTH = 64


@dataclass
class RefreshTokenEntry:
    """
    One row of the refresh token ledger.

    The ledger is the only authority on whether a refresh token can still be
    used. It stores the SHA-256 hex digest of the token, never the token
    itself.

    Lifecycle:
        ISSUED (revoked_at is None, expires_at in the future)
        → revoked by rotation or logout (revoked_at set once)
        → or expired (expires_at passed)
    """

    subject_type: SubjectType
    subject_id: int
    token_hash: str
    expires_at: datetime
    revoked_at: Optional[datetime] = None
    claims: dict[str, Any] = field(default_factory=dict)
    token_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate entity invariants at construction time."""
        if len(self.token_hash) != TOKEN_HASH_LENGTH:
            raise InvalidEntityStateException(
                f"Token hash must be a {TOKEN_HASH_LENGTH}-character hex digest."
            )

        if self.expires_at.tzinfo is None:
            raise InvalidEntityStateException(
                "Ledger expiry must be timezone-aware."
            )

    @property
    def is_revoked(self) -> bool:
        """Check if the entry has been revoked."""
        return self.revoked_at is not None

    def is_expired(self, now: datetime) -> bool:
        """
        Check the server-recorded expiry.

        Args:
            now: Current time (timezone-aware)

        Returns:
            True once expires_at lies in the past
        """
        return self.expires_at < now
