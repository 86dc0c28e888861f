"""Domain layer exceptions for invariant violations and token verification."""


class DomainException(Exception):
    """
    Base exception for domain layer.

    Domain exceptions represent broken invariants of domain objects and
    failures of domain services (token verification, token configuration).
    """

    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR"):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
        """
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class InvalidEntityStateException(DomainException):
    """Raised when an entity is in an invalid state."""

    def __init__(self, message: str):
        super().__init__(message, error_code="INVALID_ENTITY_STATE")


class TokenVerificationError(DomainException):
    """
    Base class for bearer token verification failures.

    Callers above the codec must not tell the subclasses apart in anything
    they return to a client.
    """

    def __init__(self, message: str = "Invalid token", error_code: str = "INVALID_TOKEN"):
        super().__init__(message, error_code=error_code)


class InvalidTokenSignatureError(TokenVerificationError):
    """Raised when a token's signature, structure or token type is wrong."""

    def __init__(self, message: str = "Invalid token signature"):
        super().__init__(message, error_code="INVALID_TOKEN")


class TokenExpiredError(TokenVerificationError):
    """Raised when a token's embedded expiry has passed."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, error_code="TOKEN_EXPIRED")


class TokenConfigurationError(DomainException):
    """Raised when a signing secret is missing."""

    def __init__(self, message: str = "Token signing is not configured"):
        super().__init__(message, error_code="TOKEN_CONFIGURATION_ERROR")
