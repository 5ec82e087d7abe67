"""
Resend Invitation Use Case

Handles re-issuing the token of a pending invitation and emailing it again.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from madarik_identity.app.services.notifier import IdentityNotifier
from madarik_identity.app.services.token_issuer import TokenIssuer
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.domain.entities import AuditEvent, TokenPurpose

from .dtos import ResendInvitationResponse

NOT_PENDING = Error("INVITATION_NOT_PENDING", "Can only resend pending invitations")


class ResendInvitationUseCase:
    """
    Use case for resending pending invitations.

    Business Rules:
    - Only PENDING invitations can be resent; the token is replaced with a
      conditional update, so a concurrent revoke or accept wins and no
      reminder is sent
    - A new token replaces the old one, so the previous link stops working
    - Expiry is reset to 7 days from now; status stays PENDING
    - Sends exactly one reminder email; failure does not undo the resend
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
        self, actor_user_id: UUID, invitation_id: UUID
    ) -> Result[ResendInvitationResponse]:
        """
        Execute resend invitation use case.

        Args:
            actor_user_id: User ID of the admin resending the invite
            invitation_id: ID of the invitation to resend

        Returns:
            Result with ResendInvitationResponse DTO, or Error
        """
        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)

            if invitation is None:
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "Invitation not found")
                )

            if not invitation.is_pending:
                return Return.err(NOT_PENDING)

            issued = self.token_issuer.mint(TokenPurpose.INVITATION)

            reissued = await self.uow.invitations.reissue_token(
                invitation.id, issued.token_hash, issued.expires_at
            )
            if not reissued:
                # Revoked, accepted or expired since it was read
                await self.uow.rollback()
                return Return.err(NOT_PENDING)

            audit = AuditEvent(
                user_id=actor_user_id,
                action="invitation_resent",
                event_metadata={
                    "invitation_id": str(invitation.id),
                    "email": invitation.email,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            email = invitation.email
            role = invitation.invited_role.value
            message = invitation.message

        email_sent = await self.notifier.send_invitation(
            to=email,
            token=issued.token,
            role=role,
            expires_at=issued.expires_at,
            message=message,
            reminder=True,
        )

        return Return.ok(
            ResendInvitationResponse(
                status="resent",
                expires_at=issued.expires_at,
                email_sent=email_sent,
            )
        )
