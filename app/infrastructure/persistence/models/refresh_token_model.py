"""Refresh token ledger ORM model - infrastructure layer SQLAlchemy mapping."""

from datetime import UTC, datetime
from typing import Any, Optional

from sqlalchemy import JSON, BigInteger, DateTime, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.entities.refresh_token import TOKEN_HASH_LENGTH, RefreshTokenEntry
from app.domain.entities.subject import SubjectType
from app.infrastructure.persistence.database import Base


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to timestamps read back from backends that drop tzinfo."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


class RefreshTokenModel(Base):
    """
    SQLAlchemy ORM model for the t_refresh_token ledger.

    Only the SHA-256 digest of each refresh token is stored, so a read-only
    database leak cannot be turned into valid sessions.
    """

    __tablename__ = "t_refresh_token"

    # BigInteger on real databases, INTEGER on SQLite so autoincrement works
    token_id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    subject_type: Mapped[str] = mapped_column(String(20), nullable=False)
    subject_id: Mapped[int] = mapped_column(Integer, nullable=False)
    token_hash: Mapped[str] = mapped_column(
        String(TOKEN_HASH_LENGTH),
        unique=True,
        nullable=False,
    )
    claims: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    revoked_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_t_refresh_token_subject", "subject_type", "subject_id"),
    )

    def __repr__(self) -> str:
        """String representation of RefreshTokenModel."""
        return (
            f"RefreshTokenModel(token_id={self.token_id!r}, "
            f"subject={self.subject_type!r}:{self.subject_id!r}, revoked_at={self.revoked_at!r})"
        )

    def to_entity(self) -> RefreshTokenEntry:
        """
        Convert ORM model to domain entity.

        Returns:
            RefreshTokenEntry domain entity
        """
        return RefreshTokenEntry(
            token_id=self.token_id,
            subject_type=SubjectType(self.subject_type),
            subject_id=self.subject_id,
            token_hash=self.token_hash,
            expires_at=_as_utc(self.expires_at),
            revoked_at=_as_utc(self.revoked_at),
            claims=dict(self.claims or {}),
            created_at=_as_utc(self.created_at),
        )

    @staticmethod
    def from_entity(entry: RefreshTokenEntry) -> "RefreshTokenModel":
        """
        Create ORM model from domain entity.

        Args:
            entry: Domain entity

        Returns:
            ORM model ready for persistence
        """
        model = RefreshTokenModel(
            subject_type=entry.subject_type.value,
            subject_id=entry.subject_id,
            token_hash=entry.token_hash,
            claims=dict(entry.claims),
            expires_at=entry.expires_at,
            revoked_at=entry.revoked_at,
        )

        if entry.token_id is not None:
            model.token_id = entry.token_id

        return model
