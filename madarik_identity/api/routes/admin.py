"""
Admin API Routes - Operator Endpoints

For scheduled jobs and scripts. Authentication is via Admin API Key,
not user sessions.
"""

from fastapi import APIRouter, Depends, status

from madarik_identity.api.error import ServerError
from madarik_identity.api.utils.admin_auth import verify_admin_api_key
from madarik_identity.app.services.identity_service import IdentityService
from madarik_identity.app.use_cases.invitations import ExpireInvitationsResponse
from madarik_identity.depends import get_identity_service

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/invitations/expire",
    status_code=status.HTTP_200_OK,
    response_model=ExpireInvitationsResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def expire_invitations(service: IdentityService = Depends(get_identity_service)):
    """
    Expire Overdue Invitations

    Housekeeping sweep: moves every PENDING invitation past its expiry to
    EXPIRED. Safe to run at any interval.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 500 Internal Server Error: Server error
    """
    result = await service.expire_invitations()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
