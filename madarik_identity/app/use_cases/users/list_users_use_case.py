"""
List Users Use Case

Admin listing of users with email search, newest first.
"""

from typing import Optional

from libs.result import Result, Return
from madarik_identity.app.services.unit_of_work import UnitOfWork

from .dtos import Pagination, UserInfo, UserListResponse

MAX_PAGE_SIZE = 100


class ListUsersUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, page: int = 1, limit: int = 20, query: Optional[str] = None
    ) -> Result[UserListResponse]:
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)
        query = query.strip() if query else None

        async with self.uow:
            users, total = await self.uow.users.list_paginated(
                offset=(page - 1) * limit, limit=limit, query=query or None
            )

            return Return.ok(
                UserListResponse(
                    users=[UserInfo.from_user(u) for u in users],
                    pagination=Pagination.build(page, limit, total),
                )
            )
