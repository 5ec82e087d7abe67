"""
Invitation Entity

An offer, bound to an email and a proposed role, that creates exactly
one User once accepted.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import InvitationStatus, UserRole

# Only PENDING has outgoing transitions; they never re-enter PENDING.
ALLOWED_TRANSITIONS = {
    InvitationStatus.PENDING: frozenset(
        {
            InvitationStatus.ACCEPTED,
            InvitationStatus.EXPIRED,
            InvitationStatus.REVOKED,
        }
    ),
    InvitationStatus.ACCEPTED: frozenset(),
    InvitationStatus.EXPIRED: frozenset(),
    InvitationStatus.REVOKED: frozenset(),
}


class Invitation(SQLModel, table=True):
    """
    Invitation entity - pending offer to create an account.

    Business Rules:
    - Created by an admin
    - Expires after 7 days; resend issues a new token and a new expiry
    - Token is single-use, cryptographically secure, stored as SHA-256 hash
    - At most one PENDING invitation per email (partial unique index)
    - Accepting creates the User in the same transaction
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: str = Field(max_length=255, nullable=False, index=True)
    invited_role: UserRole = Field(nullable=False)
    inviter_user_id: Optional[UUID] = Field(default=None, foreign_key="users.id")

    status: InvitationStatus = Field(default=InvitationStatus.PENDING)
    token_hash: str = Field(unique=True, index=True, max_length=64)  # SHA-256 hash
    message: Optional[str] = Field(default=None, max_length=2000)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    accepted_user_id: Optional[UUID] = Field(default=None, foreign_key="users.id")

    __table_args__ = (
        Index("idx_invitation_expires_at", "expires_at"),
        Index("idx_invitation_status", "status"),
        Index(
            "uq_invitation_pending_email",
            "email",
            unique=True,
            sqlite_where=text("status = 'PENDING'"),
            postgresql_where=text("status = 'PENDING'"),
        ),
    )

    @property
    def is_pending(self) -> bool:
        return self.status == InvitationStatus.PENDING

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def can_transition_to(self, new_status: InvitationStatus) -> bool:
        return new_status in ALLOWED_TRANSITIONS[self.status]
