from sqlmodel.ext.asyncio.session import AsyncSession

from madarik_identity.adapter.repositories.audit_event_repository import AuditEventRepository
from madarik_identity.adapter.repositories.invitation_repository import InvitationRepository
from madarik_identity.adapter.repositories.recovery_token_repository import RecoveryTokenRepository
from madarik_identity.adapter.repositories.user_repository import UserRepository
from madarik_identity.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.recovery_tokens = RecoveryTokenRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Anything not committed inside the block is discarded
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
