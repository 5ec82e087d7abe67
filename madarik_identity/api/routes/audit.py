"""
Audit API Routes

Handles audit event retrieval endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from madarik_identity.api.error import ServerError
from madarik_identity.api.utils.auth_guard import require_admin
from madarik_identity.app.services.authorization_guard import AuthenticatedUser
from madarik_identity.app.services.identity_service import IdentityService
from madarik_identity.app.use_cases.audit import AuditEventsResponse
from madarik_identity.depends import get_identity_service

router = APIRouter(prefix="/audit", tags=["Audit"])


@router.get(
    "/events",
    status_code=status.HTTP_200_OK,
    response_model=AuditEventsResponse,
)
async def get_audit_events(
    current_user: AuthenticatedUser = Depends(require_admin),
    service: IdentityService = Depends(get_identity_service),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
    action: Optional[str] = Query(None, description="Only events with this action"),
):
    """
    Get Identity Audit Events

    Query Parameters:
        - limit: Maximum number of events to return (1-100, default 50)
        - cursor: Pagination cursor for fetching next page
        - action: Filter by action, e.g. login or invite_sent

    Returns:
        - events: List of audit events ordered by newest first
        - next_cursor: Cursor for next page (null if no more events)

    Raises:
        - 401 Unauthorized: Invalid or expired session
        - 403 Forbidden: Caller is not an admin
    """
    result = await service.get_audit_events(limit=limit, cursor=cursor, action=action)

    if result.is_err():
        raise ServerError(result.error)

    return result.value
