from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from madarik_identity.api.error import ClientError, ServerError
from madarik_identity.api.utils.auth_guard import require_user
from madarik_identity.app.services.authorization_guard import AuthenticatedUser
from madarik_identity.app.services.identity_service import IdentityService
from madarik_identity.app.use_cases.users import UserInfo
from madarik_identity.depends import get_identity_service

router = APIRouter(tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def get_me(
    current_user: AuthenticatedUser = Depends(require_user),
    service: IdentityService = Depends(get_identity_service),
):
    """
    Load Current User

    Raises:
        - 401 Unauthorized: Invalid or expired session
        - 403 Forbidden: Account deactivated
        - 500 Internal Server Error: Server error
    """
    result = await service.me(current_user.id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class UpdateProfileRequest(BaseModel):
    preferred_locale: str = Field(..., description="UI locale (EN or AR)")


@router.put("/me/profile", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def update_profile(
    request: UpdateProfileRequest,
    current_user: AuthenticatedUser = Depends(require_user),
    service: IdentityService = Depends(get_identity_service),
):
    """
    Update Own Profile

    Raises:
        - 400 Bad Request: INVALID_LOCALE
        - 401 Unauthorized: Invalid or expired session
        - 500 Internal Server Error: Server error
    """
    result = await service.update_profile(current_user.id, request.preferred_locale)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_LOCALE":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
