"""
Invite User Use Case

Handles inviting a new person to the back office with a proposed role.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from madarik_identity.app.services.notifier import IdentityNotifier
from madarik_identity.app.services.token_issuer import TokenIssuer
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.app.services.validation import validate_email_address
from madarik_identity.domain.entities import (
    AuditEvent,
    Invitation,
    TokenPurpose,
    UserRole,
)

from .dtos import InvitationInfo, InviteUserResponse

logger = logging.getLogger(__name__)

DUPLICATE_INVITE = Error(
    "INVITE_ALREADY_EXISTS",
    "A pending invitation already exists for this email",
)


class InviteUserUseCase:
    """
    Use case for inviting a user.

    Business Rules:
    - Only admins can invite (enforced by the authorization guard)
    - Email must be syntactically valid; it is stored lower-cased
    - Role must be a valid UserRole
    - No invitation for an email that already has an account
    - At most one PENDING invitation per email; the partial unique index
      catches concurrent duplicates the read-check misses
    - Invitation expires after 7 days
    - Exactly one invitation email per call; a failed send does not undo
      the invitation
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_issuer: TokenIssuer,
        notifier: IdentityNotifier,
    ):
        self.uow = uow
        self.token_issuer = token_issuer
        self.notifier = notifier

    async def execute(
        self,
        inviter_user_id: UUID,
        email: str,
        role: str,
        message: Optional[str] = None,
    ) -> Result[InviteUserResponse]:
        """
        Execute invite user use case.

        Args:
            inviter_user_id: User ID of the admin sending the invite
            email: Email address to invite
            role: Role to assign on acceptance (ADMIN/MANAGER)
            message: Optional note included in the email

        Returns:
            Result with InviteUserResponse DTO, or Error
        """
        email_result = validate_email_address(email)
        if email_result.is_err():
            return Return.err(email_result.error)
        email = email_result.value

        try:
            invited_role = UserRole(role)
        except ValueError:
            return Return.err(
                Error(
                    "INVALID_ROLE",
                    f"Invalid role: {role}. Must be one of: ADMIN, MANAGER",
                )
            )

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return Return.err(
                    Error("USER_ALREADY_EXISTS", "User with this email already exists")
                )

            pending_invitation = await self.uow.invitations.get_pending_by_email(email)
            if pending_invitation:
                return Return.err(DUPLICATE_INVITE)

            issued = self.token_issuer.mint(TokenPurpose.INVITATION)

            invitation = Invitation(
                email=email,
                invited_role=invited_role,
                inviter_user_id=inviter_user_id,
                token_hash=issued.token_hash,
                message=message.strip() if message and message.strip() else None,
                expires_at=issued.expires_at,
            )

            try:
                await self.uow.invitations.create(invitation)
            except IntegrityError:
                # Lost the race against a concurrent invite for this email
                await self.uow.rollback()
                return Return.err(DUPLICATE_INVITE)

            audit = AuditEvent(
                user_id=inviter_user_id,
                action="invite_sent",
                event_metadata={
                    "invitation_id": str(invitation.id),
                    "invited_email": email,
                    "role": invited_role.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            info = InvitationInfo.from_invitation(invitation)

        logger.info(f"Invitation {info.id} created for {email} as {invited_role.value}")

        email_sent = await self.notifier.send_invitation(
            to=email,
            token=issued.token,
            role=invited_role.value,
            expires_at=issued.expires_at,
            message=info.message,
        )

        return Return.ok(InviteUserResponse(invitation=info, email_sent=email_sent))
