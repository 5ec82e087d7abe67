"""
Authorization Guard

Admits or rejects a privileged operation given the presented session
credential and the roles the operation requires.
"""

from datetime import datetime
from typing import Iterable, Optional
from uuid import UUID

from pydantic import BaseModel

from libs.result import Error, Result, Return
from madarik_identity.app.services.session_issuer import SessionIssuer
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.domain.entities import Locale, User, UserRole


class AuthenticatedUser(BaseModel):
    """Snapshot of the identity behind a request"""

    id: UUID
    email: str
    role: UserRole
    is_active: bool
    preferred_locale: Locale
    email_verified_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "AuthenticatedUser":
        return cls(
            id=user.id,
            email=user.email,
            role=user.role,
            is_active=user.is_active,
            preferred_locale=user.preferred_locale,
            email_verified_at=user.email_verified_at,
        )


class AuthorizationGuard:
    """
    Business Rules:
    - Missing, malformed, forged or expired credential -> UNAUTHENTICATED
    - Credential for an identity that no longer exists -> UNAUTHENTICATED
    - Inactive identity -> FORBIDDEN
    - Role is read from storage, so a role change applies immediately
    - Role not in the required set -> FORBIDDEN
    """

    def __init__(self, uow: UnitOfWork, session_issuer: SessionIssuer):
        self.uow = uow
        self.session_issuer = session_issuer

    async def authorize(
        self, token: Optional[str], roles: Optional[Iterable[UserRole]] = None
    ) -> Result[AuthenticatedUser]:
        """
        Resolve the identity behind token and check it against roles.

        Args:
            token: Bearer token, or None when the header was absent
            roles: Roles admitted to the operation; None admits any role
        """
        if not token:
            return Return.err(Error("UNAUTHENTICATED", "Authentication required"))

        claims_result = self.session_issuer.verify(token)
        if claims_result.is_err():
            return Return.err(
                Error("UNAUTHENTICATED", claims_result.error.message)
            )
        claims = claims_result.value

        async with self.uow:
            user = await self.uow.users.get_by_id(claims.user_id)
            if user is None:
                return Return.err(Error("UNAUTHENTICATED", "Account no longer exists"))

            current = AuthenticatedUser.from_user(user)

        if not current.is_active:
            return Return.err(Error("FORBIDDEN", "Account is inactive"))

        if roles is not None and current.role not in set(roles):
            return Return.err(
                Error("FORBIDDEN", "You do not have permission to perform this action")
            )

        return Return.ok(current)
