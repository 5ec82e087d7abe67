"""
Delete Invitation Use Case

Administrative cleanup: removes an invitation record in any status.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.domain.entities import AuditEvent

from .dtos import DeleteInvitationResponse


class DeleteInvitationUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_user_id: UUID, invitation_id: UUID
    ) -> Result[DeleteInvitationResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)

            if invitation is None:
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "Invitation not found")
                )

            audit = AuditEvent(
                user_id=actor_user_id,
                action="invitation_deleted",
                event_metadata={
                    "invitation_id": str(invitation.id),
                    "email": invitation.email,
                    "status": invitation.status.value,
                },
            )

            await self.uow.invitations.delete(invitation)
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(DeleteInvitationResponse(status="deleted"))
