"""Repository implementations using SQLAlchemy."""

from app.infrastructure.repositories.refresh_token_repository_impl import RefreshTokenRepository
from app.infrastructure.repositories.subject_repository_impl import SubjectRepository
from app.infrastructure.repositories.unit_of_work_impl import UnitOfWork

__all__ = ["RefreshTokenRepository", "SubjectRepository", "UnitOfWork"]
