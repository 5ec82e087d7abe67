"""
Get Audit Events Use Case

Retrieves identity audit events with cursor pagination.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from libs.result import Result, Return
from madarik_identity.app.services.unit_of_work import UnitOfWork

MAX_PAGE_SIZE = 100


class AuditEventInfo(BaseModel):
    action: str
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    timestamp: datetime
    metadata: Dict[str, Any]


class AuditEventsResponse(BaseModel):
    events: List[AuditEventInfo]
    next_cursor: Optional[str] = None


class GetAuditEventsUseCase:
    """
    Use case for retrieving audit events.

    Business Rules:
    - Caller must be an admin (enforced by the authorization guard)
    - Results ordered by newest first
    - Supports cursor-based pagination and an action filter
    - Each event includes action, user_email, timestamp, metadata
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        limit: int = 50,
        cursor: Optional[str] = None,
        action: Optional[str] = None,
    ) -> Result[AuditEventsResponse]:
        """
        Execute get audit events use case.

        Args:
            limit: Maximum number of events to return
            cursor: Pagination cursor (optional)
            action: Only return events with this action (optional)

        Returns:
            Result with events list and next_cursor
        """
        limit = min(max(limit, 1), MAX_PAGE_SIZE)

        async with self.uow:
            events, next_cursor = await self.uow.audit_events.get_paginated(
                limit=limit, cursor=cursor, action=action
            )

            emails: Dict[Any, Optional[str]] = {}
            events_list = []
            for event in events:
                if event.user_id and event.user_id not in emails:
                    user = await self.uow.users.get_by_id(event.user_id)
                    emails[event.user_id] = user.email if user else None

                events_list.append(
                    AuditEventInfo(
                        action=event.action,
                        user_id=str(event.user_id) if event.user_id else None,
                        user_email=emails.get(event.user_id) if event.user_id else None,
                        timestamp=event.created_at,
                        metadata=event.event_metadata or {},
                    )
                )

            return Return.ok(AuditEventsResponse(events=events_list, next_cursor=next_cursor))
