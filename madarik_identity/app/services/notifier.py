"""
Identity notifications.

Sending is fire-and-forget from the caller's point of view: a failed
delivery is logged here and reported as False, never raised. The state
change that triggered the email has already been committed.
"""

import logging
from datetime import datetime
from typing import Optional

from madarik_identity.app.services import email_templates
from madarik_identity.app.services.mail_transport import IMailTransport
from madarik_identity.app.services.settings import IdentitySettings

logger = logging.getLogger(__name__)


class IdentityNotifier:
    def __init__(self, mail_transport: IMailTransport, settings: IdentitySettings):
        self.mail_transport = mail_transport
        self.settings = settings

    async def _deliver(self, kind: str, to: str, subject: str, html: str, text: str) -> bool:
        result = await self.mail_transport.send_email(to, subject, html, text)
        if result.is_err():
            logger.warning(
                f"{kind} email to {to} not delivered ({result.error.code}), continuing"
            )
            return False
        return True

    async def send_invitation(
        self,
        to: str,
        token: str,
        role: str,
        expires_at: datetime,
        message: Optional[str] = None,
        reminder: bool = False,
    ) -> bool:
        subject, html, text = email_templates.invitation_email(
            site_name=self.settings.site_name,
            role=role,
            accept_url=self.settings.accept_invite_url(token),
            expires_at=expires_at,
            message=message,
            reminder=reminder,
        )
        kind = "Invitation reminder" if reminder else "Invitation"
        return await self._deliver(kind, to, subject, html, text)

    async def send_password_reset(self, to: str, token: str, expires_at: datetime) -> bool:
        subject, html, text = email_templates.password_reset_email(
            site_name=self.settings.site_name,
            reset_url=self.settings.reset_password_url(token),
            expires_at=expires_at,
        )
        return await self._deliver("Password reset", to, subject, html, text)

    async def send_email_verification(self, to: str, token: str, expires_at: datetime) -> bool:
        subject, html, text = email_templates.email_verification_email(
            site_name=self.settings.site_name,
            verify_url=self.settings.verify_email_url(token),
            expires_at=expires_at,
        )
        return await self._deliver("Verification", to, subject, html, text)
