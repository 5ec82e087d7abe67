"""
Request Password Reset Use Case

Handles issuing password reset tokens and emailing the reset link.
"""

import logging

from libs.result import Result, Return
from madarik_identity.app.services.notifier import IdentityNotifier
from madarik_identity.app.services.token_issuer import TokenIssuer
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.app.services.validation import normalize_email
from madarik_identity.domain.entities import AuditEvent, TokenPurpose

from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

GENERIC_RESPONSE = RequestPasswordResetResponse(
    status="sent",
    message="If the email exists, a password reset link has been sent",
)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - No email enumeration (same response for known, unknown and inactive
      emails, including malformed ones)
    - A RESET token is issued only for an existing, active user
    - Token is stored as SHA-256 hash and expires in 24 hours
    - Exactly one email per issued token; delivery failure is not surfaced
    - Audit event created for security tracking
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_issuer: TokenIssuer,
        notifier: IdentityNotifier,
    ):
        self.uow = uow
        self.token_issuer = token_issuer
        self.notifier = notifier

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with the generic reset status
        """
        email = normalize_email(email)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None or not user.is_active:
                return Return.ok(GENERIC_RESPONSE)

            issued = await self.token_issuer.issue(TokenPurpose.RESET, user.id)

            audit_event = AuditEvent(
                user_id=user.id,
                action="password_reset_requested",
                event_metadata={"email": email},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

        logger.info(f"Password reset token issued for user {user.id}")

        await self.notifier.send_password_reset(
            to=email, token=issued.token, expires_at=issued.expires_at
        )

        return Return.ok(GENERIC_RESPONSE)
