"""ORM models. Importing this package registers every table on Base.metadata."""

from app.infrastructure.persistence.models.refresh_token_model import RefreshTokenModel
from app.infrastructure.persistence.models.subject_models import (
    ModeratorModel,
    OrganizationModel,
    UserModel,
)

__all__ = ["RefreshTokenModel", "ModeratorModel", "OrganizationModel", "UserModel"]
