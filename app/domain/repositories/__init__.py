"""Repository interfaces - define contracts for data access."""

from app.domain.repositories.refresh_token_repository import IRefreshTokenRepository
from app.domain.repositories.subject_repository import ISubjectRepository
from app.domain.repositories.unit_of_work import IUnitOfWork

__all__ = ["IRefreshTokenRepository", "ISubjectRepository", "IUnitOfWork"]
