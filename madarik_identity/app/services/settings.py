from datetime import timedelta
from urllib.parse import quote

from pydantic import BaseModel


class IdentitySettings(BaseModel):
    """Identity core tunables, derived from ApplicationConfig at startup"""

    invitation_ttl: timedelta = timedelta(days=7)
    password_reset_ttl: timedelta = timedelta(hours=24)
    email_verification_ttl: timedelta = timedelta(hours=48)
    session_ttl: timedelta = timedelta(days=7)
    invalidate_prior_recovery_tokens: bool = False
    password_min_length: int = 8
    client_url: str = "http://localhost:5100"
    site_name: str = "Madarik"

    @classmethod
    def from_config(cls, config) -> "IdentitySettings":
        return cls(
            invitation_ttl=timedelta(days=config.INVITATION_TTL_DAYS),
            password_reset_ttl=timedelta(hours=config.PASSWORD_RESET_TTL_HOURS),
            email_verification_ttl=timedelta(hours=config.EMAIL_VERIFICATION_TTL_HOURS),
            session_ttl=timedelta(minutes=config.SESSION_TTL_MINUTES),
            invalidate_prior_recovery_tokens=config.INVALIDATE_PRIOR_RECOVERY_TOKENS,
            password_min_length=config.PASSWORD_MIN_LENGTH,
            client_url=config.CLIENT_URL.rstrip("/"),
            site_name=config.SITE_NAME,
        )

    def accept_invite_url(self, token: str) -> str:
        return f"{self.client_url}/auth/accept-invite?token={quote(token)}"

    def reset_password_url(self, token: str) -> str:
        return f"{self.client_url}/auth/reset-password?token={quote(token)}"

    def verify_email_url(self, token: str) -> str:
        return f"{self.client_url}/auth/verify-email?token={quote(token)}"
