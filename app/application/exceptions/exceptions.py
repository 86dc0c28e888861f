"""Application layer exceptions."""


class ApplicationError(Exception):
    """Base application layer exception."""

    def __init__(self, message: str, error_code: str = "APPLICATION_ERROR"):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
        """
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class InvalidCredentialsError(ApplicationError):
    """Raised when login credentials are invalid."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, error_code="INVALID_CREDENTIALS")


class SubjectInactiveError(ApplicationError):
    """Raised when an inactive organization or user tries to log in."""

    def __init__(self, message: str = "Account inactive"):
        super().__init__(message, error_code="SUBJECT_INACTIVE")


class PasswordNotSetError(ApplicationError):
    """Raised when an organization without a password tries to log in."""

    def __init__(self, message: str = "Organization has no password set"):
        super().__init__(message, error_code="PASSWORD_NOT_SET")


class InvalidTokenError(ApplicationError):
    """Raised when a token is invalid or malformed."""

    def __init__(self, message: str = "Invalid token", error_code: str = "INVALID_TOKEN"):
        super().__init__(message, error_code=error_code)


class TokenNotFoundError(InvalidTokenError):
    """Raised when a validly signed refresh token has no ledger entry."""

    def __init__(self, message: str = "Refresh token not found"):
        super().__init__(message, error_code="TOKEN_NOT_FOUND")


class TokenRevokedError(InvalidTokenError):
    """Raised when a refresh token was already used or logged out."""

    def __init__(self, message: str = "Refresh token revoked"):
        super().__init__(message, error_code="TOKEN_REVOKED")


class RefreshTokenExpiredError(InvalidTokenError):
    """Raised when the ledger says a refresh token has expired."""

    def __init__(self, message: str = "Refresh token expired"):
        super().__init__(message, error_code="TOKEN_EXPIRED")
