"""
Get User Stats Use Case

Head counts for the admin dashboard.
"""

from libs.result import Result, Return
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.domain.entities import UserRole

from .dtos import UserStatsResponse


class GetUserStatsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[UserStatsResponse]:
        async with self.uow:
            total = await self.uow.users.count()
            active = await self.uow.users.count(is_active=True)
            admins = await self.uow.users.count(role=UserRole.ADMIN)
            managers = await self.uow.users.count(role=UserRole.MANAGER)

            return Return.ok(
                UserStatsResponse(
                    total_users=total,
                    active_users=active,
                    inactive_users=total - active,
                    admin_users=admins,
                    manager_users=managers,
                )
            )
