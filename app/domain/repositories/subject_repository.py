"""Subject repository interface - the credential store contract."""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.entities.subject import Subject, SubjectType


class ISubjectRepository(ABC):
    """
    Read access to moderators, organizations and users.

    Each subject type has its own login field (moderators log in with a
    user name, organizations and users with an email). Implementations map
    the type to the right table and column.
    """

    @abstractmethod
    async def find_by_login(self, subject_type: SubjectType, login: str) -> Optional[Subject]:
        """
        Find a subject by its login field.

        Args:
            subject_type: Which kind of subject to look up
            login: Value of the login field (user name or email)

        Returns:
            Subject if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists_by_email(self, email: str, license: Optional[str] = None) -> bool:
        """
        Check whether a user with this email exists.

        Args:
            email: User email to look up
            license: When given, the user must also hold this license

        Returns:
            True if a matching user exists
        """
        pass
