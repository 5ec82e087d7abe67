from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from madarik_identity.app.repositories.recovery_token_repository import IRecoveryTokenRepository
from madarik_identity.domain.entities import RecoveryToken, TokenPurpose


class RecoveryTokenRepository(IRecoveryTokenRepository):
    """RecoveryToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: RecoveryToken) -> RecoveryToken:
        """Create a new recovery token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_token_hash(self, token_hash: str) -> Optional[RecoveryToken]:
        """Get recovery token by token hash"""
        stmt = select(RecoveryToken).where(RecoveryToken.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def mark_used(self, token_id: UUID, used_at: datetime) -> bool:
        """Set used_at only if it is still unset"""
        stmt = (
            update(RecoveryToken)
            .where(
                col(RecoveryToken.id) == token_id,
                col(RecoveryToken.used_at).is_(None),
            )
            .values(used_at=used_at)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def invalidate_outstanding(
        self, user_id: UUID, purpose: TokenPurpose, now: datetime
    ) -> int:
        """Mark every unused token of a purpose for a user as used"""
        stmt = (
            update(RecoveryToken)
            .where(
                col(RecoveryToken.user_id) == user_id,
                col(RecoveryToken.purpose) == purpose,
                col(RecoveryToken.used_at).is_(None),
            )
            .values(used_at=now)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
