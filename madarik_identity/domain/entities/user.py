"""
User Entity

Represents a back-office account capable of authenticating.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import Locale, UserRole


class User(SQLModel, table=True):
    """
    User entity - an identity that can log into the back office.

    Business Rules:
    - Email is unique across all users, stored lower-cased
    - Created only by accepting an invitation (bootstrap excepted)
    - Password stored as bcrypt hash (cost factor 12)
    - Never hard-deleted by the identity core
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    role: UserRole = Field(default=UserRole.MANAGER)
    is_active: bool = Field(default=True)
    preferred_locale: Locale = Field(default=Locale.EN)

    email_verified_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_role", "role"),
        Index("idx_user_is_active", "is_active"),
    )

    @property
    def email_verified(self) -> bool:
        return self.email_verified_at is not None
