"""Authentication DTOs for the application layer."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.application.dtos.session_dto import IssuedSession


class ModeratorLoginDTO(BaseModel):
    """DTO for moderator login request."""

    user_name: str = Field(..., min_length=1, description="Moderator's user name")
    password: str = Field(..., min_length=1, description="Moderator's password")

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"user_name": "mod01", "password": "secret-password"}]}
    )

    @property
    def login(self) -> str:
        return self.user_name


class EmailLoginDTO(BaseModel):
    """DTO for organization and user login requests."""

    # Lookup key only; stored emails may use special-use domains such as .local
    email: str = Field(..., min_length=1, description="Login email address")
    password: str = Field(..., min_length=1, description="Account password")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [{"email": "user@example.com", "password": "secret-password"}]
        }
    )

    @property
    def login(self) -> str:
        return self.email


class RefreshTokenDTO(BaseModel):
    """DTO for refresh and logout requests."""

    refresh_token: str = Field(..., min_length=1, description="JWT refresh token")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [{"refresh_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."}]
        }
    )


class TokenPairDTO(BaseModel):
    """DTO for token response."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    refresh_expires_at: datetime = Field(..., description="When the refresh token stops working")

    @classmethod
    def from_session(cls, session: IssuedSession, expires_in: int) -> "TokenPairDTO":
        """Build the response from an issued session."""
        return cls(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_in=expires_in,
            refresh_expires_at=session.refresh_expires_at,
        )


class LoginResultDTO(TokenPairDTO):
    """DTO for login response: the token pair plus who logged in."""

    subject_type: str = Field(..., description="moderator, organization or user")
    subject_id: int = Field(..., description="Identifier of the subject")
    login: str = Field(..., description="User name or email used to log in")
    name: Optional[str] = Field(default=None, description="Organization display name")
    organization_id: Optional[int] = None
    group_id: Optional[int] = None
    license: Optional[str] = None


class CurrentSubjectDTO(BaseModel):
    """DTO for the subject behind a valid access token."""

    subject_type: str
    subject_id: int
    claims: dict[str, Any] = Field(default_factory=dict)
    expires_at: datetime


class VerifyEmailDTO(BaseModel):
    """DTO for checking whether a user email is registered."""

    email: str = Field(..., min_length=1, description="User email to look up")


class VerifyEmailLicenseDTO(VerifyEmailDTO):
    """DTO for checking an email and license pair."""

    license: str = Field(..., min_length=1, description="License the user must hold")


class ExistsDTO(BaseModel):
    """DTO for lookup responses."""

    exists: bool
