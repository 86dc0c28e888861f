"""JWT token codec implementation using PyJWT.

This is an INFRASTRUCTURE detail. The domain layer (ITokenCodec interface)
defines WHAT we need (signing and verification with two independent
secrets), while this implementation defines HOW (JWT via PyJWT).

Dependency flow:
    SessionService (application) → ITokenCodec (domain) ← JWTTokenCodec (infrastructure)
"""

import uuid
from datetime import datetime, timezone
from typing import Any

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from app.domain.entities.subject import SubjectType
from app.domain.exceptions import (
    InvalidTokenSignatureError,
    TokenConfigurationError,
    TokenExpiredError,
)
from app.domain.services.token_codec import ITokenCodec, TokenClaims, TokenConfig

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"

# Claims owned by the codec; everything else in a payload is an extra
_RESERVED_CLAIMS = {"sub", "typ", "iat", "exp", "jti", "token_type"}


class JWTTokenCodec(ITokenCodec):
    """
    Production token codec using JWT (JSON Web Tokens) via PyJWT.

    Payload:
    - sub: Subject ID (string)
    - typ: Subject type (moderator, organization, user)
    - any extras supplied by the caller (role, organization_id, ...)
    - iat / exp: Issued-at and expiry
    - jti: Random token ID, so two tokens issued in the same second differ
    - token_type: "access" or "refresh"

    Security Considerations:
    - Access and refresh tokens use separate secrets
    - token_type is checked too, in case both secrets are set to the same value
    - Any verification failure is reported as a TokenVerificationError
    """

    def __init__(self, config: TokenConfig):
        """
        Initialize JWT token codec.

        Args:
            config: Immutable token configuration (secrets, lifetimes, algorithm)
        """
        self._config = config

    def sign_access(self, payload: dict[str, Any]) -> str:
        """
        Sign a JWT access token.

        Example:
            >>> codec = JWTTokenCodec(TokenConfig("a" * 32, "b" * 32))
            >>> codec.sign_access({"sub": "42", "typ": "user", "role": "user"})
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."
        """
        return self._sign(
            payload,
            secret=self._config.access_token_secret,
            lifetime=self._config.access_token_ttl,
            token_type=ACCESS_TOKEN,
        )

    def sign_refresh(self, payload: dict[str, Any]) -> str:
        """Sign a JWT refresh token (lifetime in whole days)."""
        return self._sign(
            payload,
            secret=self._config.refresh_token_secret,
            lifetime=self._config.refresh_token_ttl,
            token_type=REFRESH_TOKEN,
        )

    def verify_refresh(self, token: str) -> TokenClaims:
        """
        Verify and decode a JWT refresh token.

        Does NOT consult the ledger - revocation and server-side expiry are
        checked by the session service.
        """
        return self._verify(token, secret=self._config.refresh_token_secret, token_type=REFRESH_TOKEN)

    def verify_access(self, token: str) -> TokenClaims:
        """Verify and decode a JWT access token."""
        return self._verify(token, secret=self._config.access_token_secret, token_type=ACCESS_TOKEN)

    def _sign(self, payload: dict[str, Any], secret: str, lifetime, token_type: str) -> str:
        if not secret:
            raise TokenConfigurationError(f"{token_type.capitalize()} token secret is not set")

        now = datetime.now(timezone.utc)
        claims = {
            **payload,
            "iat": now,
            "exp": now + lifetime,
            "jti": str(uuid.uuid4()),
            "token_type": token_type,
        }

        return jwt.encode(claims, secret, algorithm=self._config.algorithm)

    def _verify(self, token: str, secret: str, token_type: str) -> TokenClaims:
        if not secret:
            raise TokenConfigurationError(f"{token_type.capitalize()} token secret is not set")

        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self._config.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except InvalidTokenError:
            raise InvalidTokenSignatureError()

        if payload.get("token_type") != token_type:
            raise InvalidTokenSignatureError(f"Not a {token_type} token")

        try:
            subject_type = SubjectType(payload["typ"])
            subject_id = int(payload["sub"])
        except (KeyError, ValueError, TypeError):
            raise InvalidTokenSignatureError("Token is missing subject claims")

        return TokenClaims(
            subject_type=subject_type,
            subject_id=subject_id,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            token_id=payload.get("jti"),
            extras={k: v for k, v in payload.items() if k not in _RESERVED_CLAIMS},
        )
