"""
User Management Use Cases

All user-related business logic.
"""

from .change_role_use_case import ChangeRoleUseCase
from .change_status_use_case import ChangeStatusUseCase
from .dtos import (
    AssignableUser,
    AssignableUsersResponse,
    Pagination,
    UserInfo,
    UserListResponse,
    UserStatsResponse,
)
from .get_user_stats_use_case import GetUserStatsUseCase
from .get_user_use_case import GetUserUseCase
from .list_assignable_users_use_case import ListAssignableUsersUseCase
from .list_users_use_case import ListUsersUseCase
from .load_context_use_case import LoadContextUseCase
from .update_profile_use_case import UpdateProfileUseCase

__all__ = [
    "LoadContextUseCase",
    "UpdateProfileUseCase",
    "ChangeRoleUseCase",
    "ChangeStatusUseCase",
    "ListUsersUseCase",
    "ListAssignableUsersUseCase",
    "GetUserUseCase",
    "GetUserStatsUseCase",
    "UserInfo",
    "Pagination",
    "UserListResponse",
    "UserStatsResponse",
    "AssignableUser",
    "AssignableUsersResponse",
]
