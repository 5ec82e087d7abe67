"""
Login Use Case

Handles user authentication and returns a signed session credential.
"""

import logging

from libs.result import Error, Result, Return
from madarik_identity.app.services.clock import IClock
from madarik_identity.app.services.password_hasher import IPasswordHasher
from madarik_identity.app.services.session_issuer import SessionIssuer
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.app.services.validation import normalize_email
from madarik_identity.app.use_cases.users.dtos import UserInfo
from madarik_identity.domain.entities import AuditEvent

from .dtos import LoginResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid email or password")


class LoginUseCase:
    """
    Use case for user login and session issuance.

    Business Rules:
    - Unknown email, wrong password and inactive account all fail with the
      same INVALID_CREDENTIALS error
    - A password check is always performed, even for unknown emails
    - Updates user.last_login_at
    - Creates audit event
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: IClock,
        password_hasher: IPasswordHasher,
        session_issuer: SessionIssuer,
    ):
        self.uow = uow
        self.clock = clock
        self.password_hasher = password_hasher
        self.session_issuer = session_issuer

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse containing the session credential, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))

            if user is None:
                self.password_hasher.dummy_verify()
                return Return.err(INVALID_CREDENTIALS)

            if not self.password_hasher.verify(password, user.password_hash):
                return Return.err(INVALID_CREDENTIALS)

            if not user.is_active:
                logger.warning(f"Login attempt for inactive user {user.id}")
                return Return.err(INVALID_CREDENTIALS)

            user.last_login_at = self.clock.now()
            user = await self.uow.users.update(user)

            audit = AuditEvent(
                user_id=user.id,
                action="login",
                event_metadata={"email": user.email},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            session = self.session_issuer.issue(user)

            return Return.ok(LoginResponse(session=session, user=UserInfo.from_user(user)))
