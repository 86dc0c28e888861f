"""Session lifecycle service - issuance, rotation and revocation of tokens.

Each refresh token moves through:

    ISSUED → USED_FOR_ROTATION | REVOKED | EXPIRED

and never returns to ISSUED. The ledger is the authority on which state a
token is in; a valid signature is necessary but not sufficient.

Every ledger statement runs in its own unit of work and is committed on its
own. Rotation revokes the presented token before issuing the replacement, so
a failure in between logs the subject out instead of leaving the old token
usable.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, Optional

from app.application.dtos.session_dto import (
    IssuedSession,
    RotationFailure,
    RotationFailureReason,
    RotationResult,
    RotationSuccess,
)
from app.domain.entities.refresh_token import RefreshTokenEntry
from app.domain.entities.subject import SubjectType
from app.domain.exceptions import TokenVerificationError
from app.domain.repositories.unit_of_work import IUnitOfWork
from app.domain.services.token_codec import ITokenCodec, TokenConfig, hash_refresh_token

logger = logging.getLogger(__name__)

# Identity claims always come from the ledger, never from caller-supplied extras.
_IDENTITY_CLAIMS = ("sub", "typ")


class SessionService:
    """
    Orchestrates paired access/refresh tokens against the ledger and codec.

    Expected failures of :meth:`rotate` are returned as
    :class:`RotationFailure`; only storage errors propagate.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        token_codec: ITokenCodec,
        config: TokenConfig,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ):
        """
        Initialize session service with dependencies.

        Args:
            uow_factory: Factory function that returns IUnitOfWork instances
            token_codec: Token signing/verification (abstraction)
            config: Immutable token configuration
            clock: Source of the current time (overridable in tests)
        """
        self._uow_factory = uow_factory
        self._token_codec = token_codec
        self._config = config
        self._clock = clock

    async def issue(
        self,
        subject_type: SubjectType,
        subject_id: int,
        extra_claims: Optional[dict[str, Any]] = None,
    ) -> IssuedSession:
        """
        Issue a new access/refresh pair and record the refresh token.

        Both tokens are signed from the same payload. The raw refresh token
        is returned once and never stored. If the ledger insert fails the
        error propagates and no tokens are handed out.

        Args:
            subject_type: Kind of subject the session belongs to
            subject_id: Identifier of the subject
            extra_claims: Additional claims (role, organization, ...)

        Returns:
            IssuedSession with both tokens and the ledger expiry
        """
        extras = {
            key: value
            for key, value in (extra_claims or {}).items()
            if key not in _IDENTITY_CLAIMS
        }
        payload: dict[str, Any] = {
            **extras,
            "sub": str(subject_id),
            "typ": subject_type.value,
        }

        access_token = self._token_codec.sign_access(payload)
        refresh_token = self._token_codec.sign_refresh(payload)

        expires_at = self._clock() + self._config.refresh_token_ttl
        entry = RefreshTokenEntry(
            subject_type=subject_type,
            subject_id=subject_id,
            token_hash=hash_refresh_token(refresh_token),
            expires_at=expires_at,
            claims=extras,
        )

        async with self._uow_factory() as uow:
            stored = await uow.refresh_tokens.add(entry)
            await uow.commit()

        logger.info(
            f"Issued session for {subject_type.value} {subject_id} "
            f"(ledger entry {stored.token_id}, expires {expires_at.isoformat()})"
        )

        return IssuedSession(
            access_token=access_token,
            refresh_token=refresh_token,
            refresh_expires_at=expires_at,
            subject_type=subject_type,
            subject_id=subject_id,
        )

    async def rotate(self, refresh_token: str) -> RotationResult:
        """
        Exchange a refresh token for a new pair, consuming the old token.

        Steps, stopping at the first failure:
        1. Verify signature and embedded expiry
        2. Look the ledger entry up by hash
        3. Reject a revoked entry
        4. Reject an entry whose server-side expiry has passed
        5. Revoke the entry with a conditional update; losing a race
           counts as revoked
        6. Issue a replacement with the claims recorded at issuance

        Args:
            refresh_token: The refresh token presented by the client

        Returns:
            RotationSuccess with the new pair, or RotationFailure
        """
        try:
            self._token_codec.verify_refresh(refresh_token)
        except TokenVerificationError as exc:
            logger.debug(f"Refresh token failed verification: {exc.message}")
            return RotationFailure(RotationFailureReason.INVALID_TOKEN)

        token_hash = hash_refresh_token(refresh_token)
        now = self._clock()

        async with self._uow_factory() as uow:
            entry = await uow.refresh_tokens.get_by_hash(token_hash)

            if entry is None:
                logger.warning("Validly signed refresh token has no ledger entry")
                return RotationFailure(RotationFailureReason.TOKEN_NOT_FOUND)

            if entry.is_revoked:
                logger.warning(
                    f"Revoked refresh token presented for {entry.subject_type.value} "
                    f"{entry.subject_id} (ledger entry {entry.token_id}). Possible replay."
                )
                return RotationFailure(RotationFailureReason.TOKEN_REVOKED)

            if entry.is_expired(now):
                logger.info(f"Expired refresh token presented (ledger entry {entry.token_id})")
                return RotationFailure(RotationFailureReason.TOKEN_EXPIRED)

            assert entry.token_id is not None
            revoked = await uow.refresh_tokens.revoke(entry.token_id, now)
            await uow.commit()

        if not revoked:
            logger.warning(
                f"Concurrent rotation lost for ledger entry {entry.token_id} "
                f"({entry.subject_type.value} {entry.subject_id})"
            )
            return RotationFailure(RotationFailureReason.TOKEN_REVOKED)

        session = await self.issue(
            subject_type=entry.subject_type,
            subject_id=entry.subject_id,
            extra_claims=entry.claims,
        )

        logger.info(
            f"Rotated refresh token for {entry.subject_type.value} {entry.subject_id} "
            f"(consumed ledger entry {entry.token_id})"
        )

        return RotationSuccess(session)

    async def revoke(self, refresh_token: str) -> None:
        """
        Revoke a refresh token (logout).

        Unknown, already revoked and expired tokens are a silent no-op.

        Args:
            refresh_token: The refresh token presented by the client
        """
        token_hash = hash_refresh_token(refresh_token)

        async with self._uow_factory() as uow:
            revoked = await uow.refresh_tokens.revoke_by_hash(token_hash, self._clock())
            await uow.commit()

        if revoked:
            logger.info("Refresh token revoked on logout")
        else:
            logger.debug("Logout with unknown or already revoked refresh token")
