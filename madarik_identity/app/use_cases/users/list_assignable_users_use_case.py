"""
List Assignable Users Use Case

Users that work can be handed to: active accounts with a verified email.
"""

from libs.result import Result, Return
from madarik_identity.app.services.unit_of_work import UnitOfWork

from .dtos import AssignableUser, AssignableUsersResponse


class ListAssignableUsersUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[AssignableUsersResponse]:
        async with self.uow:
            users = await self.uow.users.list_assignable()

            return Return.ok(
                AssignableUsersResponse(
                    users=[AssignableUser.from_user(u) for u in users]
                )
            )
