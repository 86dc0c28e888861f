"""Application layer exceptions."""

from app.application.exceptions.exceptions import (
    ApplicationError,
    InvalidCredentialsError,
    InvalidTokenError,
    PasswordNotSetError,
    RefreshTokenExpiredError,
    SubjectInactiveError,
    TokenNotFoundError,
    TokenRevokedError,
)

__all__ = [
    "ApplicationError",
    "InvalidCredentialsError",
    "SubjectInactiveError",
    "PasswordNotSetError",
    "InvalidTokenError",
    "TokenNotFoundError",
    "TokenRevokedError",
    "RefreshTokenExpiredError",
]
