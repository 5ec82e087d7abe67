"""
Get Invitation By Token Use Case

Lets the accept page show who was invited, and as what, before a
password is chosen. Unauthenticated; the token is the credential.
"""

from libs.result import Error, Result, Return
from madarik_identity.app.services.clock import IClock
from madarik_identity.app.services.token_issuer import TokenIssuer
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.domain.entities import InvitationStatus

from .accept_invitation_use_case import ALREADY_ACCEPTED
from .dtos import InvitationInfo


class GetInvitationByTokenUseCase:
    """
    Business Rules:
    - Unknown token: INVITATION_NOT_FOUND
    - Only a PENDING invitation inside its validity window is returned
    - ACCEPTED, REVOKED, EXPIRED and overdue PENDING report the same
      error codes accept would
    - Read only; an overdue invitation is left for accept or the sweep
      to move to EXPIRED
    """

    def __init__(self, uow: UnitOfWork, clock: IClock):
        self.uow = uow
        self.clock = clock

    async def execute(self, token: str) -> Result[InvitationInfo]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_token_hash(
                TokenIssuer.hash_token(token)
            )

            if invitation is None:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            if invitation.status == InvitationStatus.ACCEPTED:
                return Return.err(ALREADY_ACCEPTED)

            if invitation.status == InvitationStatus.REVOKED:
                return Return.err(
                    Error("INVITATION_REVOKED", "This invitation has been revoked")
                )

            if invitation.status == InvitationStatus.EXPIRED or invitation.is_expired(
                self.clock.now()
            ):
                return Return.err(Error("INVITATION_EXPIRED", "This invitation has expired"))

            return Return.ok(InvitationInfo.from_invitation(invitation))
