"""
Resend Verification Email Use Case

Issues a fresh email verification token for the signed-in user.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from madarik_identity.app.services.notifier import IdentityNotifier
from madarik_identity.app.services.token_issuer import TokenIssuer
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.domain.entities import AuditEvent, TokenPurpose

from .dtos import ResendVerificationResponse

logger = logging.getLogger(__name__)


class ResendVerificationUseCase:
    """
    Use case for (re)sending email verification.

    Business Rules:
    - Already verified: success with status already_verified, no email
    - Otherwise a new VERIFY token is issued (48 hour expiry) and emailed
    - Safe to call repeatedly; earlier tokens stay valid unless prior
      token invalidation is enabled
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

    async def execute(self, user_id: UUID) -> Result[ResendVerificationResponse]:
        """
        Execute resend verification email use case.

        Args:
            user_id: ID of the user to verify

        Returns:
            Result with resend status, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)

            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if user.email_verified:
                return Return.ok(
                    ResendVerificationResponse(
                        status="already_verified",
                        message="Email is already verified",
                    )
                )

            issued = await self.token_issuer.issue(TokenPurpose.VERIFY, user.id)

            audit = AuditEvent(
                user_id=user.id,
                action="email_verification_sent",
                event_metadata={"email": user.email},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            email = user.email

        logger.info(f"Verification token issued for user {user_id}")

        email_sent = await self.notifier.send_email_verification(
            to=email, token=issued.token, expires_at=issued.expires_at
        )

        return Return.ok(
            ResendVerificationResponse(
                status="sent",
                message="A verification link has been sent",
                email_sent=email_sent,
            )
        )
