"""
Invitation Use Case DTOs (Data Transfer Objects)

All Response classes for the invitation domain.
Tokens are delivered by email only and never appear here.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from madarik_identity.app.services.session_issuer import SessionCredential
from madarik_identity.app.use_cases.users.dtos import Pagination, UserInfo
from madarik_identity.domain.entities import Invitation, InvitationStatus, UserRole


class InvitationInfo(BaseModel):
    """Read view of an invitation"""

    id: str
    email: str
    invited_role: UserRole
    inviter_user_id: Optional[str] = None
    status: InvitationStatus
    message: Optional[str] = None
    expires_at: datetime
    created_at: datetime
    accepted_at: Optional[datetime] = None
    accepted_user_id: Optional[str] = None

    @classmethod
    def from_invitation(cls, invitation: Invitation) -> "InvitationInfo":
        return cls(
            id=str(invitation.id),
            email=invitation.email,
            invited_role=invitation.invited_role,
            inviter_user_id=(
                str(invitation.inviter_user_id) if invitation.inviter_user_id else None
            ),
            status=invitation.status,
            message=invitation.message,
            expires_at=invitation.expires_at,
            created_at=invitation.created_at,
            accepted_at=invitation.accepted_at,
            accepted_user_id=(
                str(invitation.accepted_user_id) if invitation.accepted_user_id else None
            ),
        )


class InviteUserResponse(BaseModel):
    """Response for invite user use case"""

    invitation: InvitationInfo
    email_sent: bool


class ResendInvitationResponse(BaseModel):
    """Response for resend invitation use case"""

    status: str
    expires_at: datetime
    email_sent: bool


class RevokeInvitationResponse(BaseModel):
    """Response for revoke invitation use case"""

    status: str


class DeleteInvitationResponse(BaseModel):
    """Response for delete invitation use case"""

    status: str


class AcceptInvitationResponse(BaseModel):
    """Response for accept invitation use case"""

    session: SessionCredential
    user: UserInfo
    email_verification_required: bool


class ExpireInvitationsResponse(BaseModel):
    """Response for the expiry sweep"""

    expired_count: int


class InvitationListResponse(BaseModel):
    invitations: List[InvitationInfo]
    pagination: Pagination
