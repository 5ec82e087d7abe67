from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from madarik_identity.app.repositories.user_repository import IUserRepository
from madarik_identity.domain.entities import User, UserRole


def _escape_like(term: str) -> str:
    """Make LIKE wildcards in user input match literally"""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (normalized) email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def list_paginated(
        self, offset: int, limit: int, query: Optional[str] = None
    ) -> Tuple[List[User], int]:
        """List users newest first, optionally filtered by email substring"""
        stmt = select(User)
        count_stmt = select(func.count()).select_from(User)

        if query:
            pattern = f"%{_escape_like(query.lower())}%"
            stmt = stmt.where(col(User.email).like(pattern, escape="\\"))
            count_stmt = count_stmt.where(col(User.email).like(pattern, escape="\\"))

        stmt = stmt.order_by(col(User.created_at).desc()).offset(offset).limit(limit)

        result = await self.session.exec(stmt)
        total = await self.session.exec(count_stmt)
        return list(result.all()), total.one()

    async def list_assignable(self) -> List[User]:
        """Active users with a verified email, ordered by email"""
        stmt = (
            select(User)
            .where(col(User.is_active).is_(True))
            .where(col(User.email_verified_at).is_not(None))
            .order_by(col(User.email).asc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count(
        self, is_active: Optional[bool] = None, role: Optional[UserRole] = None
    ) -> int:
        """Count users matching the given filters"""
        stmt = select(func.count()).select_from(User)
        if is_active is not None:
            stmt = stmt.where(User.is_active == is_active)
        if role is not None:
            stmt = stmt.where(User.role == role)
        result = await self.session.exec(stmt)
        return result.one()
