"""Domain exceptions - invariant violations and token verification failures."""

from app.domain.exceptions.domain_exceptions import (
    DomainException,
    InvalidEntityStateException,
    InvalidTokenSignatureError,
    TokenConfigurationError,
    TokenExpiredError,
    TokenVerificationError,
)

__all__ = [
    "DomainException",
    "InvalidEntityStateException",
    "TokenVerificationError",
    "InvalidTokenSignatureError",
    "TokenExpiredError",
    "TokenConfigurationError",
]
