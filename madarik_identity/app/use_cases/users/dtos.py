"""
User Use Case DTOs (Data Transfer Objects)

Response classes for the users domain.
The password hash never appears in any of them.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from madarik_identity.domain.entities import Locale, User, UserRole


class UserInfo(BaseModel):
    """Public view of an identity"""

    id: str
    email: str
    role: UserRole
    is_active: bool
    preferred_locale: Locale
    email_verified_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            role=user.role,
            is_active=user.is_active,
            preferred_locale=user.preferred_locale,
            email_verified_at=user.email_verified_at,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
        )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=(total + limit - 1) // limit if limit else 0,
        )


class UserListResponse(BaseModel):
    users: List[UserInfo]
    pagination: Pagination


class UserStatsResponse(BaseModel):
    total_users: int
    active_users: int
    inactive_users: int
    admin_users: int
    manager_users: int


class AssignableUser(BaseModel):
    """Minimal view used when picking an assignee"""

    id: str
    email: str
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> "AssignableUser":
        return cls(id=str(user.id), email=user.email, role=user.role)


class AssignableUsersResponse(BaseModel):
    users: List[AssignableUser]
