"""
Authorization Guard dependency

Each privileged route declares the roles it admits with require_roles().
"""

from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from madarik_identity.api.error import ClientError
from madarik_identity.app.services.authorization_guard import AuthenticatedUser
from madarik_identity.app.services.identity_service import IdentityService
from madarik_identity.depends import get_identity_service
from madarik_identity.domain.entities import UserRole

# Missing credentials are reported by the guard as UNAUTHENTICATED
security = HTTPBearer(auto_error=False)


def require_roles(*roles: UserRole):
    """
    Build a dependency admitting active users holding one of roles.

    With no roles, any active user is admitted.

    Raises:
        ClientError: 401 UNAUTHENTICATED, 403 FORBIDDEN
    """

    async def dependency(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
        service: IdentityService = Depends(get_identity_service),
    ) -> AuthenticatedUser:
        token = credentials.credentials if credentials else None
        result = await service.authorize(token, roles or None)

        if result.is_err():
            error = result.error
            if error.code == "UNAUTHENTICATED":
                raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)

        return result.value

    return dependency


require_user = require_roles()
require_admin = require_roles(UserRole.ADMIN)
