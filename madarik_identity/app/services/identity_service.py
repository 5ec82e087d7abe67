"""
Identity Service

Single entry point for the identity operations. Built per request from
explicit collaborators; each operation delegates to its use case.
"""

from typing import Iterable, Optional
from uuid import UUID

from libs.result import Result
from madarik_identity.app.services.authorization_guard import (
    AuthenticatedUser,
    AuthorizationGuard,
)
from madarik_identity.app.services.clock import IClock
from madarik_identity.app.services.mail_transport import IMailTransport
from madarik_identity.app.services.notifier import IdentityNotifier
from madarik_identity.app.services.password_hasher import IPasswordHasher
from madarik_identity.app.services.session_issuer import SessionIssuer
from madarik_identity.app.services.settings import IdentitySettings
from madarik_identity.app.services.token_issuer import TokenIssuer
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.app.use_cases.audit import AuditEventsResponse, GetAuditEventsUseCase
from madarik_identity.app.use_cases.auth import (
    ConfirmPasswordResetResponse,
    ConfirmPasswordResetUseCase,
    LoginResponse,
    LoginUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    ResendVerificationResponse,
    ResendVerificationUseCase,
    VerifyEmailResponse,
    VerifyEmailUseCase,
)
from madarik_identity.app.use_cases.invitations import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    DeleteInvitationResponse,
    DeleteInvitationUseCase,
    ExpireInvitationsResponse,
    ExpireInvitationsUseCase,
    GetInvitationByTokenUseCase,
    InvitationInfo,
    InvitationListResponse,
    InviteUserResponse,
    InviteUserUseCase,
    ListInvitationsUseCase,
    ResendInvitationResponse,
    ResendInvitationUseCase,
    RevokeInvitationResponse,
    RevokeInvitationUseCase,
)
from madarik_identity.app.use_cases.users import (
    AssignableUsersResponse,
    ChangeRoleUseCase,
    ChangeStatusUseCase,
    GetUserStatsUseCase,
    GetUserUseCase,
    ListAssignableUsersUseCase,
    ListUsersUseCase,
    LoadContextUseCase,
    UpdateProfileUseCase,
    UserInfo,
    UserListResponse,
    UserStatsResponse,
)
from madarik_identity.domain.entities import Locale, UserRole


class IdentityService:
    """
    Orchestrates the identity core.

    Unauthenticated operations: login, get_invitation_by_token,
    accept_invitation, forgot_password, reset_password, verify_email.
    Everything else is admitted by authorize() first, at the HTTP layer.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        mail_transport: IMailTransport,
        clock: IClock,
        password_hasher: IPasswordHasher,
        session_issuer: SessionIssuer,
        settings: IdentitySettings,
    ):
        self.uow = uow
        self.clock = clock
        self.password_hasher = password_hasher
        self.session_issuer = session_issuer
        self.settings = settings
        self.notifier = IdentityNotifier(mail_transport, settings)
        self.token_issuer = TokenIssuer(uow, clock, settings)
        self.guard = AuthorizationGuard(uow, session_issuer)

    async def authorize(
        self, token: Optional[str], roles: Optional[Iterable[UserRole]] = None
    ) -> Result[AuthenticatedUser]:
        return await self.guard.authorize(token, roles)

    # Authentication

    async def login(self, email: str, password: str) -> Result[LoginResponse]:
        return await LoginUseCase(
            self.uow, self.clock, self.password_hasher, self.session_issuer
        ).execute(email, password)

    async def forgot_password(self, email: str) -> Result[RequestPasswordResetResponse]:
        return await RequestPasswordResetUseCase(
            self.uow, self.token_issuer, self.notifier
        ).execute(email)

    async def reset_password(
        self, token: str, new_password: str
    ) -> Result[ConfirmPasswordResetResponse]:
        return await ConfirmPasswordResetUseCase(
            self.uow, self.token_issuer, self.password_hasher, self.settings
        ).execute(token, new_password)

    async def verify_email(self, token: str) -> Result[VerifyEmailResponse]:
        return await VerifyEmailUseCase(self.uow, self.token_issuer, self.clock).execute(
            token
        )

    async def resend_verification(self, user_id: UUID) -> Result[ResendVerificationResponse]:
        return await ResendVerificationUseCase(
            self.uow, self.token_issuer, self.notifier
        ).execute(user_id)

    # Invitations

    async def invite_user(
        self,
        inviter_user_id: UUID,
        email: str,
        role: str,
        message: Optional[str] = None,
    ) -> Result[InviteUserResponse]:
        return await InviteUserUseCase(
            self.uow, self.token_issuer, self.notifier
        ).execute(inviter_user_id, email, role, message)

    async def resend_invitation(
        self, actor_user_id: UUID, invitation_id: UUID
    ) -> Result[ResendInvitationResponse]:
        return await ResendInvitationUseCase(
            self.uow, self.token_issuer, self.notifier
        ).execute(actor_user_id, invitation_id)

    async def revoke_invitation(
        self, actor_user_id: UUID, invitation_id: UUID
    ) -> Result[RevokeInvitationResponse]:
        return await RevokeInvitationUseCase(self.uow).execute(actor_user_id, invitation_id)

    async def delete_invitation(
        self, actor_user_id: UUID, invitation_id: UUID
    ) -> Result[DeleteInvitationResponse]:
        return await DeleteInvitationUseCase(self.uow).execute(actor_user_id, invitation_id)

    async def get_invitation_by_token(self, token: str) -> Result[InvitationInfo]:
        return await GetInvitationByTokenUseCase(self.uow, self.clock).execute(token)

    async def accept_invitation(
        self,
        token: str,
        password: str,
        preferred_locale: Optional[Locale] = None,
    ) -> Result[AcceptInvitationResponse]:
        return await AcceptInvitationUseCase(
            self.uow,
            self.clock,
            self.password_hasher,
            self.session_issuer,
            self.token_issuer,
            self.notifier,
            self.settings,
        ).execute(token, password, preferred_locale)

    async def list_invitations(
        self, page: int = 1, limit: int = 20, status: Optional[str] = None
    ) -> Result[InvitationListResponse]:
        return await ListInvitationsUseCase(self.uow).execute(page, limit, status)

    async def expire_invitations(self) -> Result[ExpireInvitationsResponse]:
        return await ExpireInvitationsUseCase(self.uow, self.clock).execute()

    # Users

    async def me(self, user_id: UUID) -> Result[UserInfo]:
        return await LoadContextUseCase(self.uow).execute(user_id)

    async def update_profile(self, user_id: UUID, preferred_locale: str) -> Result[UserInfo]:
        return await UpdateProfileUseCase(self.uow).execute(user_id, preferred_locale)

    async def update_user_role(
        self, actor_user_id: UUID, target_user_id: UUID, role: str
    ) -> Result[UserInfo]:
        return await ChangeRoleUseCase(self.uow).execute(actor_user_id, target_user_id, role)

    async def update_user_status(
        self, actor_user_id: UUID, target_user_id: UUID, is_active: bool
    ) -> Result[UserInfo]:
        return await ChangeStatusUseCase(self.uow).execute(
            actor_user_id, target_user_id, is_active
        )

    async def list_users(
        self, page: int = 1, limit: int = 20, query: Optional[str] = None
    ) -> Result[UserListResponse]:
        return await ListUsersUseCase(self.uow).execute(page, limit, query)

    async def list_assignable_users(self) -> Result[AssignableUsersResponse]:
        return await ListAssignableUsersUseCase(self.uow).execute()

    async def get_user(self, user_id: UUID) -> Result[UserInfo]:
        return await GetUserUseCase(self.uow).execute(user_id)

    async def get_user_stats(self) -> Result[UserStatsResponse]:
        return await GetUserStatsUseCase(self.uow).execute()

    # Audit

    async def get_audit_events(
        self,
        limit: int = 50,
        cursor: Optional[str] = None,
        action: Optional[str] = None,
    ) -> Result[AuditEventsResponse]:
        return await GetAuditEventsUseCase(self.uow).execute(limit, cursor, action)
