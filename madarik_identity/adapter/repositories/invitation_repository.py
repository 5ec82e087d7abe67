from datetime import datetime
from typing import Any, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from madarik_identity.app.repositories.invitation_repository import IInvitationRepository
from madarik_identity.domain.entities import Invitation, InvitationStatus


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        stmt = select(Invitation).where(Invitation.id == invitation_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token_hash(self, token_hash: str) -> Optional[Invitation]:
        """Get invitation by the SHA-256 hash of its token"""
        stmt = select(Invitation).where(Invitation.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_pending_by_email(self, email: str) -> Optional[Invitation]:
        """Get the pending invitation for an email, if any"""
        stmt = select(Invitation).where(
            Invitation.email == email,
            Invitation.status == InvitationStatus.PENDING,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_paginated(
        self, offset: int, limit: int, status: Optional[InvitationStatus] = None
    ) -> Tuple[List[Invitation], int]:
        """List invitations newest first with the total count"""
        stmt = select(Invitation)
        count_stmt = select(func.count()).select_from(Invitation)

        if status is not None:
            stmt = stmt.where(Invitation.status == status)
            count_stmt = count_stmt.where(Invitation.status == status)

        stmt = (
            stmt.order_by(col(Invitation.created_at).desc())
            .offset(offset)
            .limit(limit)
        )

        result = await self.session.exec(stmt)
        total = await self.session.exec(count_stmt)
        return list(result.all()), total.one()

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def delete(self, invitation: Invitation) -> None:
        """Permanently remove an invitation"""
        await self.session.delete(invitation)
        await self.session.flush()

    async def transition_from_pending(
        self,
        invitation_id: UUID,
        new_status: InvitationStatus,
        expected_token_hash: Optional[str] = None,
        **values: Any,
    ) -> bool:
        """Conditional PENDING -> new_status update; False if another writer won"""
        stmt = update(Invitation).where(
            col(Invitation.id) == invitation_id,
            col(Invitation.status) == InvitationStatus.PENDING,
        )
        if expected_token_hash is not None:
            stmt = stmt.where(col(Invitation.token_hash) == expected_token_hash)
        stmt = stmt.values(status=new_status, **values)
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def reissue_token(
        self, invitation_id: UUID, token_hash: str, expires_at: datetime
    ) -> bool:
        """Conditional token replacement; False if the invitation left PENDING"""
        stmt = (
            update(Invitation)
            .where(
                col(Invitation.id) == invitation_id,
                col(Invitation.status) == InvitationStatus.PENDING,
            )
            .values(token_hash=token_hash, expires_at=expires_at)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def expire_overdue(self, now: datetime) -> int:
        """Mark every PENDING invitation past its expiry as EXPIRED"""
        stmt = (
            update(Invitation)
            .where(
                col(Invitation.status) == InvitationStatus.PENDING,
                col(Invitation.expires_at) <= now,
            )
            .values(status=InvitationStatus.EXPIRED)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
