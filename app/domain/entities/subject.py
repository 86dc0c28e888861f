"""Subject domain entity - the identity a session is issued for."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from app.domain.exceptions import InvalidEntityStateException


class SubjectType(str, Enum):
    """
    Kinds of subjects that can log in.

    The value is what gets persisted in the ledger's ``subject_type`` column
    and what appears in the ``typ`` claim of every token.
    """

    MODERATOR = "moderator"
    ORGANIZATION = "organization"
    USER = "user"


@dataclass
class Subject:
    """
    An authenticated identity: a moderator, an organization or a user.

    Subjects are owned by the credential store. The session core only sees
    ``(subject_type, subject_id)`` plus the claim extras returned by
    :meth:`claim_extras`.
    """

    subject_type: SubjectType
    subject_id: int
    login: str
    password_hash: Optional[str]
    active: bool = True
    name: Optional[str] = None
    organization_id: Optional[int] = None
    group_id: Optional[int] = None
    license: Optional[str] = None

    def __post_init__(self):
        """Validate entity invariants at construction time."""
        if not isinstance(self.subject_type, SubjectType):
            raise InvalidEntityStateException(
                f"Unknown subject type: '{self.subject_type}'."
            )

        if self.subject_id is None or self.subject_id <= 0:
            raise InvalidEntityStateException(
                f"Subject id must be a positive integer, got {self.subject_id!r}."
            )

        if not self.login or len(self.login.strip()) == 0:
            raise InvalidEntityStateException(
                "Login field cannot be empty. A subject must be addressable by its login."
            )

    @property
    def role(self) -> str:
        """Role claim granted at login. Same as the subject type."""
        return self.subject_type.value

    @property
    def has_password(self) -> bool:
        """Whether a secret has been set (organizations may exist without one)."""
        return bool(self.password_hash)

    def claim_extras(self) -> dict[str, Any]:
        """
        Build the claims added to both tokens at login.

        Users also carry their organization, group and license so that
        downstream handlers can scope requests without another lookup.

        Returns:
            Mapping of claim name to value (JSON-serializable)
        """
        extras: dict[str, Any] = {"role": self.role}

        if self.subject_type is SubjectType.USER:
            extras["organization_id"] = self.organization_id
            extras["group_id"] = self.group_id
            extras["license"] = self.license

        return extras
