"""Token codec interface - domain layer abstraction.

The domain cares that:
1. Access and refresh tokens are signed with independent secrets
2. Both carry the same subject identity and claims
3. Refresh tokens are only ever stored as a one-way hash

The domain does NOT care which token format or library is used.
"""

import hashlib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from app.domain.entities.subject import SubjectType


@dataclass(frozen=True)
class TokenConfig:
    """
    Immutable token configuration, built once from settings at startup.

    Compromise of the access secret must not allow forging refresh tokens
    and vice versa, so the two secrets are kept apart.
    """

    access_token_secret: str
    refresh_token_secret: str
    access_token_ttl: timedelta = timedelta(minutes=15)
    refresh_token_days: int = 7
    algorithm: str = "HS256"

    @property
    def refresh_token_ttl(self) -> timedelta:
        """Refresh token lifetime in whole days."""
        return timedelta(days=self.refresh_token_days)


@dataclass(frozen=True)
class TokenClaims:
    """Domain representation of a decoded token."""

    subject_type: SubjectType
    subject_id: int
    issued_at: datetime
    expires_at: datetime
    token_id: str | None = None
    extras: dict[str, Any] = field(default_factory=dict)


def hash_refresh_token(token: str) -> str:
    """
    Compute the ledger key of a refresh token.

    Args:
        token: Raw refresh token string

    Returns:
        SHA-256 hex digest (64 lowercase hex characters)
    """
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class ITokenCodec(ABC):
    """
    Interface for signing and verifying bearer tokens.

    Verification failures raise :class:`TokenVerificationError` subclasses.
    Callers must collapse them into one opaque "invalid token" outcome.
    """

    @abstractmethod
    def sign_access(self, payload: dict[str, Any]) -> str:
        """
        Sign an access token with the access secret and short expiry.

        Args:
            payload: Claims to embed (``sub``, ``typ`` and any extras)

        Returns:
            Encoded token string

        Raises:
            TokenConfigurationError: If the access secret is not set
        """
        pass

    @abstractmethod
    def sign_refresh(self, payload: dict[str, Any]) -> str:
        """
        Sign a refresh token with the refresh secret and long expiry.

        Args:
            payload: Claims to embed (``sub``, ``typ`` and any extras)

        Returns:
            Encoded token string

        Raises:
            TokenConfigurationError: If the refresh secret is not set
        """
        pass

    @abstractmethod
    def verify_refresh(self, token: str) -> TokenClaims:
        """
        Verify a refresh token's signature and embedded expiry.

        Args:
            token: Encoded refresh token

        Returns:
            Decoded claims

        Raises:
            InvalidTokenSignatureError: Wrong signature, structure or token type
            TokenExpiredError: Embedded expiry has passed
        """
        pass

    @abstractmethod
    def verify_access(self, token: str) -> TokenClaims:
        """
        Verify an access token's signature and embedded expiry.

        Args:
            token: Encoded access token

        Returns:
            Decoded claims

        Raises:
            InvalidTokenSignatureError: Wrong signature, structure or token type
            TokenExpiredError: Embedded expiry has passed
        """
        pass
