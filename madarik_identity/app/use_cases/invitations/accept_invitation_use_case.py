"""
Accept Invitation Use Case

Redeems an invitation token and creates the invited identity.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from madarik_identity.app.services.clock import IClock
from madarik_identity.app.services.notifier import IdentityNotifier
from madarik_identity.app.services.password_hasher import IPasswordHasher
from madarik_identity.app.services.session_issuer import SessionIssuer
from madarik_identity.app.services.settings import IdentitySettings
from madarik_identity.app.services.token_issuer import TokenIssuer
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.app.services.validation import validate_password
from madarik_identity.app.use_cases.users.dtos import UserInfo
from madarik_identity.domain.entities import (
    AuditEvent,
    InvitationStatus,
    Locale,
    TokenPurpose,
    User,
)

from .dtos import AcceptInvitationResponse

logger = logging.getLogger(__name__)

ALREADY_ACCEPTED = Error(
    "INVITATION_ALREADY_ACCEPTED", "This invitation has already been accepted"
)
INVALID_TOKEN = Error("INVALID_TOKEN", "Invalid or non-existent invitation token")


class AcceptInvitationUseCase:
    """
    Use case for accepting invitations.

    Business Rules:
    - Password strength is validated before anything is read or written
    - Unknown token -> INVALID_TOKEN
    - ACCEPTED -> INVITATION_ALREADY_ACCEPTED, REVOKED -> INVITATION_REVOKED
    - EXPIRED, or PENDING past its expiry -> INVITATION_EXPIRED; the lazy
      expiry is persisted before failing
    - Identity creation and PENDING -> ACCEPTED commit together; of two
      concurrent accepts exactly one wins, and a token replaced by a
      concurrent resend no longer redeems
    - New identity gets the invited role and an unverified email
    - A verification email follows; its failure does not undo the accept
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: IClock,
        password_hasher: IPasswordHasher,
        session_issuer: SessionIssuer,
        token_issuer: TokenIssuer,
        notifier: IdentityNotifier,
        settings: IdentitySettings,
    ):
        self.uow = uow
        self.clock = clock
        self.password_hasher = password_hasher
        self.session_issuer = session_issuer
        self.token_issuer = token_issuer
        self.notifier = notifier
        self.settings = settings

    async def _lost_race_error(self, invitation_id: UUID) -> Error:
        """Explain why the conditional accept matched no row"""
        current = await self.uow.invitations.get_by_id(invitation_id)
        if current is None or current.status == InvitationStatus.ACCEPTED:
            return ALREADY_ACCEPTED
        if current.status == InvitationStatus.REVOKED:
            return Error("INVITATION_REVOKED", "This invitation has been revoked")
        if current.status == InvitationStatus.EXPIRED:
            return Error("INVITATION_EXPIRED", "This invitation has expired")
        # Still PENDING: a resend replaced the token that was presented
        return INVALID_TOKEN

    async def execute(
        self,
        token: str,
        password: str,
        preferred_locale: Optional[Locale] = None,
    ) -> Result[AcceptInvitationResponse]:
        """
        Execute accept invitation use case.

        Args:
            token: Invitation token from the email link
            password: Password for the new account
            preferred_locale: Optional UI locale for the new account

        Returns:
            Result with AcceptInvitationResponse DTO, or Error
        """
        password_result = validate_password(password, self.settings.password_min_length)
        if password_result.is_err():
            return Return.err(password_result.error)

        token_hash = TokenIssuer.hash_token(token)

        async with self.uow:
            invitation = await self.uow.invitations.get_by_token_hash(token_hash)

            if invitation is None:
                return Return.err(INVALID_TOKEN)

            if invitation.status == InvitationStatus.ACCEPTED:
                return Return.err(ALREADY_ACCEPTED)

            if invitation.status == InvitationStatus.REVOKED:
                return Return.err(
                    Error("INVITATION_REVOKED", "This invitation has been revoked")
                )

            now = self.clock.now()

            if invitation.status == InvitationStatus.EXPIRED:
                return Return.err(Error("INVITATION_EXPIRED", "This invitation has expired"))

            if invitation.is_expired(now):
                await self.uow.invitations.transition_from_pending(
                    invitation.id, InvitationStatus.EXPIRED
                )
                await self.uow.commit()
                return Return.err(Error("INVITATION_EXPIRED", "This invitation has expired"))

            if await self.uow.users.get_by_email(invitation.email):
                return Return.err(
                    Error("USER_ALREADY_EXISTS", "User with this email already exists")
                )

            user = User(
                email=invitation.email,
                password_hash=self.password_hasher.hash(password),
                role=invitation.invited_role,
                preferred_locale=preferred_locale or Locale.EN,
            )

            try:
                user = await self.uow.users.create(user)
            except IntegrityError:
                # A concurrent accept of the same invitation created the user
                await self.uow.rollback()
                return Return.err(ALREADY_ACCEPTED)

            accepted = await self.uow.invitations.transition_from_pending(
                invitation.id,
                InvitationStatus.ACCEPTED,
                expected_token_hash=token_hash,
                accepted_at=now,
                accepted_user_id=user.id,
            )
            if not accepted:
                await self.uow.rollback()
                return Return.err(await self._lost_race_error(invitation.id))

            audit = AuditEvent(
                user_id=user.id,
                action="invitation_accepted",
                event_metadata={
                    "invitation_id": str(invitation.id),
                    "role": user.role.value,
                },
            )
            await self.uow.audit_events.create(audit)

            verification = await self.token_issuer.issue(TokenPurpose.VERIFY, user.id)

            await self.uow.commit()

            user_info = UserInfo.from_user(user)
            session = self.session_issuer.issue(user)

        logger.info(f"Invitation {invitation.id} accepted by user {user_info.id}")

        await self.notifier.send_email_verification(
            to=user_info.email,
            token=verification.token,
            expires_at=verification.expires_at,
        )

        return Return.ok(
            AcceptInvitationResponse(
                session=session,
                user=user_info,
                email_verification_required=True,
            )
        )
