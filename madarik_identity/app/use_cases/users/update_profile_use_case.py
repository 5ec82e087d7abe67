"""
Update Profile Use Case

Lets any signed-in user change their own preferences.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.domain.entities import Locale

from .dtos import UserInfo


class UpdateProfileUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, preferred_locale: str) -> Result[UserInfo]:
        try:
            locale = Locale(preferred_locale.upper())
        except ValueError:
            return Return.err(
                Error(
                    "INVALID_LOCALE",
                    f"Invalid locale: {preferred_locale}. Must be one of: EN, AR",
                )
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            user.preferred_locale = locale
            user = await self.uow.users.update(user)

            await self.uow.commit()

            return Return.ok(UserInfo.from_user(user))
