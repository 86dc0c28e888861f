"""Session lifecycle results.

Expected rotation failures are returned as values rather than raised, so
the session core never throws for a bad, unknown, revoked or expired token.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Union

from app.domain.entities.subject import SubjectType


@dataclass(frozen=True)
class IssuedSession:
    """An access/refresh token pair handed out once to the client."""

    access_token: str
    refresh_token: str
    refresh_expires_at: datetime
    subject_type: SubjectType
    subject_id: int


class RotationFailureReason(str, Enum):
    """Why a refresh token could not be rotated. Values are client-facing."""

    INVALID_TOKEN = "Invalid refresh token"
    TOKEN_NOT_FOUND = "Refresh token not found"
    TOKEN_REVOKED = "Refresh token revoked"
    TOKEN_EXPIRED = "Refresh token expired"


@dataclass(frozen=True)
class RotationFailure:
    """Failed rotation outcome."""

    reason: RotationFailureReason

    ok = False

    @property
    def message(self) -> str:
        return self.reason.value


@dataclass(frozen=True)
class RotationSuccess:
    """Successful rotation outcome: the replacement pair."""

    session: IssuedSession

    ok = True


RotationResult = Union[RotationSuccess, RotationFailure]
