"""Subject repository implementation using SQLAlchemy."""

from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities.subject import Subject, SubjectType
from app.domain.repositories.subject_repository import ISubjectRepository
from app.infrastructure.persistence.models.subject_models import (
    ModeratorModel,
    OrganizationModel,
    UserModel,
)

SubjectModel = Union[ModeratorModel, OrganizationModel, UserModel]

# subject type -> (model, login column)
_SUBJECT_TABLES = {
    SubjectType.MODERATOR: (ModeratorModel, ModeratorModel.user_name),
    SubjectType.ORGANIZATION: (OrganizationModel, OrganizationModel.email),
    SubjectType.USER: (UserModel, UserModel.email),
}


class SubjectRepository(ISubjectRepository):
    """
    SQLAlchemy implementation of ISubjectRepository.

    Returns domain Subjects, never ORM models.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with a database session.

        Args:
            session: SQLAlchemy async session (managed by UoW)
        """
        self._session = session

    async def find_by_login(self, subject_type: SubjectType, login: str) -> Optional[Subject]:
        """Find a subject by user name (moderators) or email (organizations, users)."""
        model, login_column = _SUBJECT_TABLES[subject_type]
        result = await self._session.execute(
            select(model).where(login_column == login).limit(1)
        )
        return self._to_entity(result.scalar_one_or_none())

    async def exists_by_email(self, email: str, license: Optional[str] = None) -> bool:
        """Check for a user by email, optionally also matching the license."""
        query = select(UserModel.user_id).where(UserModel.email == email)
        if license is not None:
            query = query.where(UserModel.license == license)

        result = await self._session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    @staticmethod
    def _to_entity(subject_model: Optional[SubjectModel]) -> Optional[Subject]:
        if subject_model is None:
            return None
        return subject_model.to_entity()
