"""
RecoveryToken Entity

Single-use password reset and email verification tokens.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import TokenPurpose


class RecoveryToken(SQLModel, table=True):
    """
    RecoveryToken entity - single-purpose, single-use capability.

    Business Rules:
    - RESET tokens expire after 24 hours, VERIFY tokens after 48 hours
    - Token is SHA-256 hash of a secure random string
    - Redeemable exactly once: used_at is set in the same transaction
      as the effect it authorizes
    - Several outstanding tokens of one purpose may coexist per user
    """

    __tablename__ = "recovery_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False)
    purpose: TokenPurpose = Field(nullable=False)
    token_hash: str = Field(unique=True, max_length=64)  # SHA-256 output

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_recovery_token_expires_at", "expires_at"),
        Index("idx_recovery_token_user_purpose", "user_id", "purpose"),
    )

    @property
    def is_used(self) -> bool:
        return self.used_at is not None

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
