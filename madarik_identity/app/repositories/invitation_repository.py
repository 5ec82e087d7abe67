from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, List, Optional, Tuple
from uuid import UUID

from madarik_identity.domain.entities import Invitation, InvitationStatus


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[Invitation]:
        """Get invitation by the SHA-256 hash of its token"""
        pass

    @abstractmethod
    async def get_pending_by_email(self, email: str) -> Optional[Invitation]:
        """Get the pending invitation for an email, if any"""
        pass

    @abstractmethod
    async def list_paginated(
        self, offset: int, limit: int, status: Optional[InvitationStatus] = None
    ) -> Tuple[List[Invitation], int]:
        """List invitations newest first with the total count"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def delete(self, invitation: Invitation) -> None:
        """Permanently remove an invitation"""
        pass

    @abstractmethod
    async def transition_from_pending(
        self,
        invitation_id: UUID,
        new_status: InvitationStatus,
        expected_token_hash: Optional[str] = None,
        **values: Any,
    ) -> bool:
        """
        Move a PENDING invitation to new_status in one conditional update.

        With expected_token_hash the row must also still carry that token.
        Returns False when the row was no longer PENDING (or its token was
        replaced), which means a concurrent request already changed it.
        """
        pass

    @abstractmethod
    async def reissue_token(
        self, invitation_id: UUID, token_hash: str, expires_at: datetime
    ) -> bool:
        """Replace token and expiry of a PENDING invitation; False if no longer PENDING"""
        pass

    @abstractmethod
    async def expire_overdue(self, now: datetime) -> int:
        """Mark every PENDING invitation past its expiry as EXPIRED"""
        pass
