"""Data Transfer Objects for application layer."""

from app.application.dtos.auth_dto import (
    CurrentSubjectDTO,
    EmailLoginDTO,
    ExistsDTO,
    LoginResultDTO,
    ModeratorLoginDTO,
    RefreshTokenDTO,
    TokenPairDTO,
    VerifyEmailDTO,
    VerifyEmailLicenseDTO,
)
from app.application.dtos.session_dto import (
    IssuedSession,
    RotationFailure,
    RotationFailureReason,
    RotationResult,
    RotationSuccess,
)

__all__ = [
    "ModeratorLoginDTO",
    "EmailLoginDTO",
    "RefreshTokenDTO",
    "TokenPairDTO",
    "LoginResultDTO",
    "CurrentSubjectDTO",
    "VerifyEmailDTO",
    "VerifyEmailLicenseDTO",
    "ExistsDTO",
    "IssuedSession",
    "RotationFailure",
    "RotationFailureReason",
    "RotationResult",
    "RotationSuccess",
]
