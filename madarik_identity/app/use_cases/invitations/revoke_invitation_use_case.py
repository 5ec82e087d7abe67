"""
Revoke Invitation Use Case

Handles revoking pending invitations.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.domain.entities import AuditEvent, InvitationStatus

from .dtos import RevokeInvitationResponse


class RevokeInvitationUseCase:
    """
    Use case for revoking pending invitations.

    Business Rules:
    - Only PENDING invitations can be revoked
    - PENDING -> REVOKED; the token becomes permanently unredeemable
    - Conditional update, so a concurrent accept and revoke cannot both win
    - Creates audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_user_id: UUID, invitation_id: UUID
    ) -> Result[RevokeInvitationResponse]:
        """
        Execute revoke invitation use case.

        Args:
            actor_user_id: User ID of the admin revoking the invite
            invitation_id: ID of the invitation to revoke

        Returns:
            Result with RevokeInvitationResponse DTO, or Error
        """
        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)

            if invitation is None:
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "Invitation not found")
                )

            if not invitation.can_transition_to(InvitationStatus.REVOKED):
                return Return.err(
                    Error(
                        "INVITATION_NOT_PENDING",
                        "Can only revoke pending invitations",
                    )
                )

            revoked = await self.uow.invitations.transition_from_pending(
                invitation.id, InvitationStatus.REVOKED
            )
            if not revoked:
                return Return.err(
                    Error(
                        "INVITATION_NOT_PENDING",
                        "Can only revoke pending invitations",
                    )
                )

            audit = AuditEvent(
                user_id=actor_user_id,
                action="invitation_revoked",
                event_metadata={
                    "invitation_id": str(invitation.id),
                    "email": invitation.email,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(RevokeInvitationResponse(status="revoked"))
