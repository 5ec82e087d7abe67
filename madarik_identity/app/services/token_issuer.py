"""
Token Issuer

Generates single-use, time-bounded secrets for invitations, password
resets and email verification, and redeems the persisted ones.
"""

import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from libs.result import Error, Result, Return
from madarik_identity.app.services.clock import IClock
from madarik_identity.app.services.settings import IdentitySettings
from madarik_identity.app.services.unit_of_work import UnitOfWork
from madarik_identity.domain.entities import RecoveryToken, TokenPurpose

TOKEN_BYTES = 32  # 256 bits of entropy


class IssuedToken(BaseModel):
    """A freshly minted token; only token_hash is ever stored"""

    token: str
    token_hash: str
    expires_at: datetime


class TokenIssuer:
    """
    Business Rules:
    - Tokens carry no information about their owner
    - Only the SHA-256 hash of a token is persisted
    - redeem() checks existence, then prior use, then expiry
    - redeem() marks the token used inside the caller's unit of work; the
      caller commits it together with the effect the token authorizes
    """

    def __init__(self, uow: UnitOfWork, clock: IClock, settings: IdentitySettings):
        self.uow = uow
        self.clock = clock
        self.settings = settings

    @staticmethod
    def generate_token() -> str:
        return secrets.token_urlsafe(TOKEN_BYTES)

    @staticmethod
    def hash_token(token: str) -> str:
        return hashlib.sha256(token.encode()).hexdigest()

    def ttl_for(self, purpose: TokenPurpose) -> timedelta:
        if purpose == TokenPurpose.INVITATION:
            return self.settings.invitation_ttl
        if purpose == TokenPurpose.RESET:
            return self.settings.password_reset_ttl
        return self.settings.email_verification_ttl

    def mint(self, purpose: TokenPurpose, ttl: Optional[timedelta] = None) -> IssuedToken:
        """Generate a token and its expiry without persisting anything"""
        token = self.generate_token()
        return IssuedToken(
            token=token,
            token_hash=self.hash_token(token),
            expires_at=self.clock.now() + (ttl if ttl is not None else self.ttl_for(purpose)),
        )

    async def issue(
        self, purpose: TokenPurpose, owner_id: UUID, ttl: Optional[timedelta] = None
    ) -> IssuedToken:
        """
        Persist a RESET or VERIFY token for owner_id (not committed).

        Invitation tokens live on the invitation row; use mint() for those.
        """
        if purpose == TokenPurpose.INVITATION:
            raise ValueError("Invitation tokens are stored on the invitation, use mint()")

        if self.settings.invalidate_prior_recovery_tokens:
            await self.uow.recovery_tokens.invalidate_outstanding(
                owner_id, purpose, self.clock.now()
            )

        issued = self.mint(purpose, ttl)
        await self.uow.recovery_tokens.create(
            RecoveryToken(
                user_id=owner_id,
                purpose=purpose,
                token_hash=issued.token_hash,
                expires_at=issued.expires_at,
            )
        )
        return issued

    async def redeem(self, token: str, purpose: TokenPurpose) -> Result[RecoveryToken]:
        """
        Validate a token and mark it used (not committed).

        Errors:
            - INVALID_TOKEN: Token not found or issued for another purpose
            - TOKEN_ALREADY_USED: Token was redeemed before, or a
              concurrent redemption won the race
            - TOKEN_EXPIRED: Token is past its expiry
        """
        recovery_token = await self.uow.recovery_tokens.get_by_token_hash(
            self.hash_token(token)
        )

        if recovery_token is None or recovery_token.purpose != purpose:
            return Return.err(Error("INVALID_TOKEN", "Invalid or unknown token"))

        if recovery_token.is_used:
            return Return.err(
                Error("TOKEN_ALREADY_USED", "This token has already been used")
            )

        now = self.clock.now()
        if recovery_token.is_expired(now):
            return Return.err(Error("TOKEN_EXPIRED", "This token has expired"))

        claimed = await self.uow.recovery_tokens.mark_used(recovery_token.id, now)
        if not claimed:
            return Return.err(
                Error("TOKEN_ALREADY_USED", "This token has already been used")
            )

        return Return.ok(recovery_token)
