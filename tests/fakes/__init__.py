"""Fake implementations for testing."""

from tests.fakes.password_hasher_fake import FakePasswordHasher
from tests.fakes.refresh_token_repository_fake import FakeRefreshTokenRepository
from tests.fakes.subject_repository_fake import FakeSubjectRepository
from tests.fakes.unit_of_work_fake import FakeUnitOfWork

__all__ = [
    "FakePasswordHasher",
    "FakeRefreshTokenRepository",
    "FakeSubjectRepository",
    "FakeUnitOfWork",
]
