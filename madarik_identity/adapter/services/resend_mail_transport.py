import logging
from typing import Optional

import httpx

from libs.result import Error, Result, Return
from madarik_identity.app.services.mail_transport import IMailTransport

logger = logging.getLogger(__name__)


class ResendMailTransport(IMailTransport):
    """Sends email through the Resend HTTP API"""

    def __init__(
        self,
        api_key: str,
        from_email: str,
        from_name: Optional[str] = None,
        api_url: str = "https://api.resend.com/emails",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.api_url = api_url
        self.timeout = timeout
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) and bool(self.from_email)

    def _sender(self) -> str:
        if self.from_name:
            return f"{self.from_name} <{self.from_email}>"
        return self.from_email

    async def send_email(
        self, to: str, subject: str, html: str, text: Optional[str] = None
    ) -> Result[None]:
        if not self.is_configured:
            logger.warning(f"Mail transport not configured, skipping email to {to}")
            return Return.ok(None)

        payload = {"from": self._sender(), "to": [to], "subject": subject, "html": html}
        if text:
            payload["text"] = text

        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            if self._client is not None:
                response = await self._client.post(
                    self.api_url, json=payload, headers=headers, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.api_url, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Resend API error for {to}: {e.response.status_code} {e.response.text}"
            )
            return Return.err(
                Error(
                    "MAIL_DELIVERY_FAILED",
                    f"Mail provider rejected the message ({e.response.status_code})",
                )
            )
        except httpx.HTTPError as e:
            logger.error(f"Failed to send email to {to}: {e}")
            return Return.err(Error("MAIL_DELIVERY_FAILED", "Mail provider unreachable"))

        try:
            message_id = response.json().get("id", "unknown id")
        except ValueError:
            message_id = "unknown id"
        logger.info(f"Email queued via Resend: {message_id}")
        return Return.ok(None)
