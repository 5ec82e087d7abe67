"""
Invitation Use Cases

The invitation lifecycle: invite, resend, revoke, delete, look up, accept, expire.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .delete_invitation_use_case import DeleteInvitationUseCase
from .dtos import (
    AcceptInvitationResponse,
    DeleteInvitationResponse,
    ExpireInvitationsResponse,
    InvitationInfo,
    InvitationListResponse,
    InviteUserResponse,
    ResendInvitationResponse,
    RevokeInvitationResponse,
)
from .expire_invitations_use_case import ExpireInvitationsUseCase
from .get_invitation_by_token_use_case import GetInvitationByTokenUseCase
from .invite_user_use_case import InviteUserUseCase
from .list_invitations_use_case import ListInvitationsUseCase
from .resend_invitation_use_case import ResendInvitationUseCase
from .revoke_invitation_use_case import RevokeInvitationUseCase

__all__ = [
    "InviteUserUseCase",
    "ResendInvitationUseCase",
    "RevokeInvitationUseCase",
    "DeleteInvitationUseCase",
    "GetInvitationByTokenUseCase",
    "AcceptInvitationUseCase",
    "ExpireInvitationsUseCase",
    "ListInvitationsUseCase",
    "InvitationInfo",
    "InviteUserResponse",
    "ResendInvitationResponse",
    "RevokeInvitationResponse",
    "DeleteInvitationResponse",
    "AcceptInvitationResponse",
    "ExpireInvitationsResponse",
    "InvitationListResponse",
]
