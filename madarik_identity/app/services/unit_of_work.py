from abc import ABC, abstractmethod

from madarik_identity.app.repositories.audit_event_repository import IAuditEventRepository
from madarik_identity.app.repositories.invitation_repository import IInvitationRepository
from madarik_identity.app.repositories.recovery_token_repository import IRecoveryTokenRepository
from madarik_identity.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    invitations: IInvitationRepository
    recovery_tokens: IRecoveryTokenRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
