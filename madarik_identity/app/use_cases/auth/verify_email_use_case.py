"""
Verify Email Use Case

Handles email verification via single-use token.
"""

from libs.result import Error, Result, Return
from madarik_identity.app.services.clock import IClock
from madarik_identity.app.services.token_issuer import TokenIssuer
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.domain.entities import AuditEvent, TokenPurpose

from .dtos import VerifyEmailResponse


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token must exist, be a VERIFY token, be unused and unexpired
    - Sets email_verified_at in the same transaction that marks the token used
    - An already verified user keeps the original verification timestamp
    - Records audit event
    """

    def __init__(self, uow: UnitOfWork, token_issuer: TokenIssuer, clock: IClock):
        self.uow = uow
        self.token_issuer = token_issuer
        self.clock = clock

    async def execute(self, token: str) -> Result[VerifyEmailResponse]:
        """
        Execute email verification use case.

        Args:
            token: Verification token from email link

        Returns:
            Result with verification status, or Error

        Errors:
            - INVALID_TOKEN: Token not found or not a verification token
            - TOKEN_ALREADY_USED: Token has already been redeemed
            - TOKEN_EXPIRED: Token has expired
        """
        async with self.uow:
            redeemed = await self.token_issuer.redeem(token, TokenPurpose.VERIFY)
            if redeemed.is_err():
                return Return.err(redeemed.error)
            verify_token = redeemed.value

            user = await self.uow.users.get_by_id(verify_token.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if user.email_verified_at is None:
                user.email_verified_at = self.clock.now()
                await self.uow.users.update(user)

            audit = AuditEvent(
                user_id=user.id,
                action="email_verified",
                event_metadata={"email": user.email},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                VerifyEmailResponse(
                    status="verified",
                    message="Email successfully verified",
                )
            )
