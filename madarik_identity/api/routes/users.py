"""
User Management API Routes

Endpoints for listing and administering back-office users.
Everything is admin-only except the assignee list, which managers can read.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from libs.result import Error
from madarik_identity.api.error import ClientError, ServerError
from madarik_identity.api.utils.auth_guard import require_admin, require_roles
from madarik_identity.app.services.authorization_guard import AuthenticatedUser
from madarik_identity.app.services.identity_service import IdentityService
from madarik_identity.app.use_cases.users import (
    AssignableUsersResponse,
    UserInfo,
    UserListResponse,
    UserStatsResponse,
)
from madarik_identity.depends import get_identity_service
from madarik_identity.domain.entities import UserRole

router = APIRouter(prefix="/users", tags=["Users"])


def _parse_user_id(user_id: str) -> UUID:
    try:
        return UUID(user_id)
    except ValueError:
        raise ClientError(
            Error("INVALID_USER_ID", "Invalid user ID format"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )


def _raise_for_user_error(error: Error):
    if error.code == "INVALID_ROLE":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    elif error.code == "CANNOT_MODIFY_SELF":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    elif error.code == "USER_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


@router.get("", status_code=status.HTTP_200_OK, response_model=UserListResponse)
async def list_users(
    current_user: AuthenticatedUser = Depends(require_admin),
    service: IdentityService = Depends(get_identity_service),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    q: Optional[str] = Query(None, max_length=255, description="Email search"),
):
    """List users, newest first, optionally filtered by email substring"""
    result = await service.list_users(page, limit, q)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=UserStatsResponse)
async def get_user_stats(
    current_user: AuthenticatedUser = Depends(require_admin),
    service: IdentityService = Depends(get_identity_service),
):
    result = await service.get_user_stats()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get(
    "/for-assignment",
    status_code=status.HTTP_200_OK,
    response_model=AssignableUsersResponse,
)
async def list_assignable_users(
    current_user: AuthenticatedUser = Depends(
        require_roles(UserRole.ADMIN, UserRole.MANAGER)
    ),
    service: IdentityService = Depends(get_identity_service),
):
    """Active, verified users that work can be assigned to, ordered by email"""
    result = await service.list_assignable_users()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def get_user(
    user_id: str,
    current_user: AuthenticatedUser = Depends(require_admin),
    service: IdentityService = Depends(get_identity_service),
):
    result = await service.get_user(_parse_user_id(user_id))

    if result.is_err():
        _raise_for_user_error(result.error)

    return result.value


class ChangeRoleRequest(BaseModel):
    role: str = Field(..., description="New role (ADMIN or MANAGER)")


@router.put("/{user_id}/role", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def change_role(
    user_id: str,
    request: ChangeRoleRequest,
    current_user: AuthenticatedUser = Depends(require_admin),
    service: IdentityService = Depends(get_identity_service),
):
    """
    Change User Role

    Raises:
        - 400 Bad Request: INVALID_ROLE
        - 403 Forbidden: Not an admin, or CANNOT_MODIFY_SELF
        - 404 Not Found: USER_NOT_FOUND
    """
    result = await service.update_user_role(
        current_user.id, _parse_user_id(user_id), request.role
    )

    if result.is_err():
        _raise_for_user_error(result.error)

    return result.value


class ChangeStatusRequest(BaseModel):
    is_active: bool = Field(..., description="False deactivates the account")


@router.put("/{user_id}/status", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def change_status(
    user_id: str,
    request: ChangeStatusRequest,
    current_user: AuthenticatedUser = Depends(require_admin),
    service: IdentityService = Depends(get_identity_service),
):
    """
    Activate or Deactivate User

    Raises:
        - 403 Forbidden: Not an admin, or CANNOT_MODIFY_SELF
        - 404 Not Found: USER_NOT_FOUND
    """
    result = await service.update_user_status(
        current_user.id, _parse_user_id(user_id), request.is_active
    )

    if result.is_err():
        _raise_for_user_error(result.error)

    return result.value
