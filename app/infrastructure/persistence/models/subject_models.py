"""Subject ORM models - moderators, organizations and users.

These tables belong to the credential store. The session core only reads
them at login; their CRUD lives elsewhere.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, SmallInteger, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.entities.subject import Subject, SubjectType
from app.infrastructure.persistence.database import Base


class ModeratorModel(Base):
    """SQLAlchemy ORM model for the m_moderator table."""

    __tablename__ = "m_moderator"

    moderator_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_name: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    created_date: Mapped[datetime] = mapped_column(insert_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"ModeratorModel(moderator_id={self.moderator_id!r}, user_name={self.user_name!r})"

    def to_entity(self) -> Subject:
        """Convert ORM model to domain entity."""
        return Subject(
            subject_type=SubjectType.MODERATOR,
            subject_id=self.moderator_id,
            login=self.user_name,
            password_hash=self.password,
        )


class OrganizationModel(Base):
    """SQLAlchemy ORM model for the m_organization table."""

    __tablename__ = "m_organization"

    organization_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    # Organizations can be created before a password is assigned
    password: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    active_status: Mapped[int] = mapped_column(SmallInteger, default=1, nullable=False)

    created_date: Mapped[datetime] = mapped_column(insert_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"OrganizationModel(organization_id={self.organization_id!r}, email={self.email!r})"

    def to_entity(self) -> Subject:
        """Convert ORM model to domain entity."""
        return Subject(
            subject_type=SubjectType.ORGANIZATION,
            subject_id=self.organization_id,
            login=self.email,
            password_hash=self.password,
            active=self.active_status != 0,
            name=self.name,
        )


class UserModel(Base):
    """SQLAlchemy ORM model for the m_user table."""

    __tablename__ = "m_user"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    group_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    license: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    active_status: Mapped[int] = mapped_column(SmallInteger, default=1, nullable=False)

    created_date: Mapped[datetime] = mapped_column(insert_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"UserModel(user_id={self.user_id!r}, email={self.email!r})"

    def to_entity(self) -> Subject:
        """Convert ORM model to domain entity."""
        return Subject(
            subject_type=SubjectType.USER,
            subject_id=self.user_id,
            login=self.email,
            password_hash=self.password,
            active=self.active_status != 0,
            organization_id=self.organization_id,
            group_id=self.group_id,
            license=self.license,
        )
