"""
Expire Invitations Use Case

Housekeeping sweep that moves overdue PENDING invitations to EXPIRED.
Expiry is also enforced lazily on accept, so running this is optional.
"""

import logging

from libs.result import Result, Return
from madarik_identity.app.services.clock import IClock
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.domain.entities import AuditEvent

from .dtos import ExpireInvitationsResponse

logger = logging.getLogger(__name__)


class ExpireInvitationsUseCase:
    def __init__(self, uow: UnitOfWork, clock: IClock):
        self.uow = uow
        self.clock = clock

    async def execute(self) -> Result[ExpireInvitationsResponse]:
        async with self.uow:
            expired_count = await self.uow.invitations.expire_overdue(self.clock.now())

            if expired_count:
                audit = AuditEvent(
                    user_id=None,
                    action="invitations_expired",
                    event_metadata={"expired_count": expired_count},
                )
                await self.uow.audit_events.create(audit)

            await self.uow.commit()

        logger.info(f"Expiry sweep marked {expired_count} invitation(s) as expired")

        return Return.ok(ExpireInvitationsResponse(expired_count=expired_count))
