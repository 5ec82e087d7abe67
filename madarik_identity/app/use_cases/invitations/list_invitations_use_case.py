"""
List Invitations Use Case

Admin listing of invitations, newest first.
"""

from typing import Optional

from libs.result import Error, Result, Return
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.app.use_cases.users.dtos import Pagination
from madarik_identity.domain.entities import InvitationStatus

from .dtos import InvitationInfo, InvitationListResponse

MAX_PAGE_SIZE = 100


class ListInvitationsUseCase:
    """
    Business Rules:
    - page starts at 1; limit is capped at 100
    - Optional status filter must be a valid InvitationStatus
    - Token hashes are never part of the response
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, page: int = 1, limit: int = 20, status: Optional[str] = None
    ) -> Result[InvitationListResponse]:
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)

        status_filter = None
        if status:
            try:
                status_filter = InvitationStatus(status.upper())
            except ValueError:
                return Return.err(
                    Error("INVALID_STATUS", f"Invalid invitation status: {status}")
                )

        async with self.uow:
            invitations, total = await self.uow.invitations.list_paginated(
                offset=(page - 1) * limit, limit=limit, status=status_filter
            )

            return Return.ok(
                InvitationListResponse(
                    invitations=[InvitationInfo.from_invitation(i) for i in invitations],
                    pagination=Pagination.build(page, limit, total),
                )
            )
