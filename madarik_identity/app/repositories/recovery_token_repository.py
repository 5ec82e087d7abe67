from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from madarik_identity.domain.entities import RecoveryToken, TokenPurpose


class IRecoveryTokenRepository(ABC):
    """RecoveryToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: RecoveryToken) -> RecoveryToken:
        """Create a new recovery token"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[RecoveryToken]:
        """Get recovery token by token hash"""
        pass

    @abstractmethod
    async def mark_used(self, token_id: UUID, used_at: datetime) -> bool:
        """
        Set used_at only if it is still unset.

        Returns False when another transaction redeemed the token first.
        """
        pass

    @abstractmethod
    async def invalidate_outstanding(
        self, user_id: UUID, purpose: TokenPurpose, now: datetime
    ) -> int:
        """Mark every unused token of a purpose for a user as used"""
        pass
