"""
Change User Status Use Case

Handles activating and deactivating users.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.domain.entities import AuditEvent

from .dtos import UserInfo


class ChangeStatusUseCase:
    """
    Use case for activating or deactivating a user.

    Business Rules:
    - Only admins can change status (enforced by the authorization guard)
    - An admin cannot deactivate themselves
    - Deactivated users cannot log in and outstanding sessions are refused
    - Users are never hard-deleted
    - Creates audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_user_id: UUID, target_user_id: UUID, is_active: bool
    ) -> Result[UserInfo]:
        if actor_user_id == target_user_id and not is_active:
            return Return.err(
                Error("CANNOT_MODIFY_SELF", "You cannot deactivate your own account")
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(target_user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            was_active = user.is_active

            user.is_active = is_active
            user = await self.uow.users.update(user)

            audit = AuditEvent(
                user_id=actor_user_id,
                action="status_changed",
                event_metadata={
                    "target_user_id": str(target_user_id),
                    "was_active": was_active,
                    "is_active": is_active,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(UserInfo.from_user(user))
