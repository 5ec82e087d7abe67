"""
Get User Use Case

Admin lookup of a single user by ID.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from madarik_identity.app.services.unit_of_work import UnitOfWork

from .dtos import UserInfo


class GetUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[UserInfo]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            return Return.ok(UserInfo.from_user(user))
