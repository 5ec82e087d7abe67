from abc import ABC, abstractmethod
from typing import Optional

from libs.result import Result


class IMailTransport(ABC):
    """Outbound email collaborator - best effort, never raises"""

    @abstractmethod
    async def send_email(
        self, to: str, subject: str, html: str, text: Optional[str] = None
    ) -> Result[None]:
        """
        Send one email.

        Returns:
            Result with None on success (or when sending is disabled),
            Error MAIL_DELIVERY_FAILED when the transport failed
        """
        pass
