"""
Use Cases

Organized into domain folders:
- auth/: Login, password reset and email verification
- invitations/: Invitation lifecycle
- users/: User management
- audit/: Audit logs

Import from subdirectories for better organization.
"""

from .audit import GetAuditEventsUseCase
from .auth import (
    ConfirmPasswordResetUseCase,
    LoginUseCase,
    RequestPasswordResetUseCase,
    ResendVerificationUseCase,
    VerifyEmailUseCase,
)
from .invitations import (
    AcceptInvitationUseCase,
    DeleteInvitationUseCase,
    ExpireInvitationsUseCase,
    InviteUserUseCase,
    ListInvitationsUseCase,
    ResendInvitationUseCase,
    RevokeInvitationUseCase,
)
from .users import (
    ChangeRoleUseCase,
    ChangeStatusUseCase,
    GetUserStatsUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    LoadContextUseCase,
    UpdateProfileUseCase,
)

__all__ = [
    # Auth
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    # Invitations
    "InviteUserUseCase",
    "ResendInvitationUseCase",
    "RevokeInvitationUseCase",
    "DeleteInvitationUseCase",
    "AcceptInvitationUseCase",
    "ExpireInvitationsUseCase",
    "ListInvitationsUseCase",
    # Users
    "LoadContextUseCase",
    "UpdateProfileUseCase",
    "ChangeRoleUseCase",
    "ChangeStatusUseCase",
    "ListUsersUseCase",
    "GetUserUseCase",
    "GetUserStatsUseCase",
    # Audit
    "GetAuditEventsUseCase",
]
