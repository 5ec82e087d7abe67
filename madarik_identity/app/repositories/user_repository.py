from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from madarik_identity.domain.entities import User, UserRole


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (normalized) email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def list_paginated(
        self, offset: int, limit: int, query: Optional[str] = None
    ) -> Tuple[List[User], int]:
        """List users newest first, optionally filtered by email substring"""
        pass

    @abstractmethod
    async def count(
        self, is_active: Optional[bool] = None, role: Optional[UserRole] = None
    ) -> int:
        """Count users matching the given filters"""
        pass

    @abstractmethod
    async def list_assignable(self) -> List[User]:
        """Active users with a verified email, ordered by email"""
        pass
