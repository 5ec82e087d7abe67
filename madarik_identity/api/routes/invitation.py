from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from libs.result import Error
from madarik_identity.api.error import ClientError, ServerError
from madarik_identity.api.utils.auth_guard import require_admin
from madarik_identity.app.services.authorization_guard import AuthenticatedUser
from madarik_identity.app.services.identity_service import IdentityService
from madarik_identity.app.use_cases.invitations import (
    AcceptInvitationResponse,
    DeleteInvitationResponse,
    InvitationInfo,
    InvitationListResponse,
    InviteUserResponse,
    ResendInvitationResponse,
    RevokeInvitationResponse,
)
from madarik_identity.depends import get_identity_service
from madarik_identity.domain.entities import Locale

router = APIRouter(prefix="/invitations", tags=["Invitations"])


def _parse_invitation_id(invitation_id: str) -> UUID:
    try:
        return UUID(invitation_id)
    except ValueError:
        raise ClientError(
            Error("INVALID_INVITATION_ID", "Invalid invitation ID format"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )


def _raise_for_invitation_error(error: Error):
    if error.code == "INVITATION_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code == "INVITATION_NOT_PENDING":
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    raise ServerError(error)


class InviteUserRequest(BaseModel):
    email: str = Field(..., max_length=255, description="Email address to invite")
    role: str = Field(..., description="Role to grant on acceptance (ADMIN or MANAGER)")
    message: Optional[str] = Field(
        None, max_length=2000, description="Optional note included in the email"
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=InviteUserResponse,
)
async def invite_user(
    request: InviteUserRequest,
    current_user: AuthenticatedUser = Depends(require_admin),
    service: IdentityService = Depends(get_identity_service),
):
    """
    Invite User

    Creates a pending invitation and emails the invitee a single-use link.

    Raises:
        - 400 Bad Request: INVALID_EMAIL, INVALID_ROLE
        - 401 Unauthorized: Invalid or expired session
        - 403 Forbidden: Caller is not an admin
        - 409 Conflict: USER_ALREADY_EXISTS, INVITE_ALREADY_EXISTS
        - 500 Internal Server Error: Server error
    """
    result = await service.invite_user(
        current_user.id, request.email, request.role, request.message
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_EMAIL", "INVALID_ROLE"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("USER_ALREADY_EXISTS", "INVITE_ALREADY_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=InvitationListResponse)
async def list_invitations(
    current_user: AuthenticatedUser = Depends(require_admin),
    service: IdentityService = Depends(get_identity_service),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status_filter: Optional[str] = Query(None, alias="status"),
):
    """
    List Invitations

    Newest first. Optional ?status=PENDING|ACCEPTED|EXPIRED|REVOKED filter.
    """
    result = await service.list_invitations(page, limit, status_filter)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_STATUS":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.get(
    "/by-token/{token}",
    status_code=status.HTTP_200_OK,
    response_model=InvitationInfo,
)
async def get_invitation_by_token(
    token: str,
    service: IdentityService = Depends(get_identity_service),
):
    """
    Look Up Invitation By Token

    Unauthenticated. Shows the accept page who was invited and as what.

    Raises:
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_ACCEPTED
        - 410 Gone: INVITATION_EXPIRED, INVITATION_REVOKED
    """
    result = await service.get_invitation_by_token(token)

    if result.is_err():
        error = result.error
        if error.code == "INVITATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("INVITATION_EXPIRED", "INVITATION_REVOKED"):
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        elif error.code == "INVITATION_ALREADY_ACCEPTED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class AcceptInvitationRequest(BaseModel):
    """
    Accept invitation HTTP request payload

    Validates incoming request for accepting an invitation.
    """

    token: str = Field(..., min_length=1, description="Invitation token")
    password: str = Field(..., description="Password for the new account")
    preferred_locale: Optional[Locale] = Field(None, description="UI locale (EN or AR)")


@router.post(
    "/accept",
    status_code=status.HTTP_201_CREATED,
    response_model=AcceptInvitationResponse,
)
async def accept_invitation(
    request: AcceptInvitationRequest,
    service: IdentityService = Depends(get_identity_service),
):
    """
    Accept Invitation

    Creates the invited account and signs it in.

    Raises:
        - 400 Bad Request: INVALID_TOKEN, INVALID_PASSWORD
        - 409 Conflict: INVITATION_ALREADY_ACCEPTED, USER_ALREADY_EXISTS
        - 410 Gone: INVITATION_EXPIRED, INVITATION_REVOKED
        - 500 Internal Server Error: Server error
    """
    result = await service.accept_invitation(
        request.token, request.password, request.preferred_locale
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_TOKEN", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("INVITATION_EXPIRED", "INVITATION_REVOKED"):
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        elif error.code in ("INVITATION_ALREADY_ACCEPTED", "USER_ALREADY_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.post(
    "/{invitation_id}/resend",
    status_code=status.HTTP_200_OK,
    response_model=ResendInvitationResponse,
)
async def resend_invitation(
    invitation_id: str,
    current_user: AuthenticatedUser = Depends(require_admin),
    service: IdentityService = Depends(get_identity_service),
):
    """
    Resend Invitation

    Replaces the token of a pending invitation, resets its expiry to 7 days
    from now and emails a reminder. The previous link stops working.

    Raises:
        - 400 Bad Request: Invalid invitation_id format
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_NOT_PENDING
    """
    result = await service.resend_invitation(
        current_user.id, _parse_invitation_id(invitation_id)
    )

    if result.is_err():
        _raise_for_invitation_error(result.error)

    return result.value


@router.post(
    "/{invitation_id}/revoke",
    status_code=status.HTTP_200_OK,
    response_model=RevokeInvitationResponse,
)
async def revoke_invitation(
    invitation_id: str,
    current_user: AuthenticatedUser = Depends(require_admin),
    service: IdentityService = Depends(get_identity_service),
):
    """
    Revoke Invitation

    Raises:
        - 400 Bad Request: Invalid invitation_id format
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_NOT_PENDING
    """
    result = await service.revoke_invitation(
        current_user.id, _parse_invitation_id(invitation_id)
    )

    if result.is_err():
        _raise_for_invitation_error(result.error)

    return result.value


@router.delete(
    "/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteInvitationResponse,
)
async def delete_invitation(
    invitation_id: str,
    current_user: AuthenticatedUser = Depends(require_admin),
    service: IdentityService = Depends(get_identity_service),
):
    """
    Delete Invitation

    Removes the invitation record whatever its status.

    Raises:
        - 400 Bad Request: Invalid invitation_id format
        - 404 Not Found: INVITATION_NOT_FOUND
    """
    result = await service.delete_invitation(
        current_user.id, _parse_invitation_id(invitation_id)
    )

    if result.is_err():
        _raise_for_invitation_error(result.error)

    return result.value
