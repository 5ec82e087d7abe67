"""
Confirm Password Reset Use Case

Handles password reset confirmation with single-use token redemption.
"""

from libs.result import Error, Result, Return
from madarik_identity.app.services.password_hasher import IPasswordHasher
from madarik_identity.app.services.settings import IdentitySettings
from madarik_identity.app.services.token_issuer import TokenIssuer
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.app.services.validation import validate_password
from madarik_identity.domain.entities import AuditEvent, TokenPurpose

from .dtos import ConfirmPasswordResetResponse


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - New password is validated before the token is touched
    - Token must exist, be a RESET token, be unused and unexpired
    - Password is hashed with bcrypt (cost factor 12)
    - Token is marked used and the password replaced in one transaction
    - Audit event created for security tracking
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_issuer: TokenIssuer,
        password_hasher: IPasswordHasher,
        settings: IdentitySettings,
    ):
        self.uow = uow
        self.token_issuer = token_issuer
        self.password_hasher = password_hasher
        self.settings = settings

    async def execute(self, token: str, new_password: str) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from email)
            new_password: New password to set

        Returns:
            Result with confirmation status, or Error

        Errors:
            - INVALID_PASSWORD: Password does not meet requirements
            - INVALID_TOKEN: Token not found or not a reset token
            - TOKEN_ALREADY_USED: Token has already been used
            - TOKEN_EXPIRED: Token has expired
        """
        password_validation = validate_password(
            new_password, self.settings.password_min_length
        )
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            redeemed = await self.token_issuer.redeem(token, TokenPurpose.RESET)
            if redeemed.is_err():
                return Return.err(redeemed.error)
            reset_token = redeemed.value

            user = await self.uow.users.get_by_id(reset_token.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            user.password_hash = self.password_hasher.hash(new_password)
            await self.uow.users.update(user)

            audit_event = AuditEvent(
                user_id=user.id,
                action="password_reset_confirmed",
                event_metadata={"token_id": str(reset_token.id)},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            return Return.ok(
                ConfirmPasswordResetResponse(
                    status="success",
                    message="Password has been reset successfully",
                )
            )
