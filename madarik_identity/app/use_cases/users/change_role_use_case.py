"""
Change User Role Use Case

Handles changing a user's role (ADMIN/MANAGER).
"""

from uuid import UUID

from libs.result import Error, Result, Return
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.domain.entities import AuditEvent, UserRole

from .dtos import UserInfo


class ChangeRoleUseCase:
    """
    Use case for changing a user's role.

    Business Rules:
    - Only admins can change roles (enforced by the authorization guard)
    - An admin cannot demote themselves
    - Target user must exist
    - Role must be a valid UserRole
    - The new role applies to the user's next request
    - Creates audit event for compliance tracking
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_user_id: UUID, target_user_id: UUID, new_role: str
    ) -> Result[UserInfo]:
        """
        Execute change role use case.

        Args:
            actor_user_id: User ID of the admin making the change
            target_user_id: User ID whose role is being changed
            new_role: New role to assign (ADMIN/MANAGER)

        Returns:
            Result with the updated UserInfo, or Error
        """
        try:
            role = UserRole(new_role)
        except ValueError:
            return Return.err(
                Error(
                    "INVALID_ROLE",
                    f"Invalid role: {new_role}. Must be one of: ADMIN, MANAGER",
                )
            )

        if actor_user_id == target_user_id and role != UserRole.ADMIN:
            return Return.err(
                Error("CANNOT_MODIFY_SELF", "You cannot change your own role")
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(target_user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            old_role = user.role.value

            user.role = role
            user = await self.uow.users.update(user)

            audit = AuditEvent(
                user_id=actor_user_id,
                action="role_changed",
                event_metadata={
                    "target_user_id": str(target_user_id),
                    "old_role": old_role,
                    "new_role": role.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(UserInfo.from_user(user))
