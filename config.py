import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./madarik.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["http://localhost:5100"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Sessions
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    SESSION_TTL_MINUTES = int(data.get("SESSION_TTL_MINUTES", 60 * 24 * 7))
    LOGIN_MAX_ATTEMPTS = int(data.get("LOGIN_MAX_ATTEMPTS", 5))
    LOGIN_WINDOW_MINUTES = int(data.get("LOGIN_WINDOW_MINUTES", 15))

    # Tokens
    INVITATION_TTL_DAYS = int(data.get("INVITATION_TTL_DAYS", 7))
    PASSWORD_RESET_TTL_HOURS = int(data.get("PASSWORD_RESET_TTL_HOURS", 24))
    EMAIL_VERIFICATION_TTL_HOURS = int(data.get("EMAIL_VERIFICATION_TTL_HOURS", 48))
    INVALIDATE_PRIOR_RECOVERY_TOKENS = bool(data.get("INVALIDATE_PRIOR_RECOVERY_TOKENS", False))
    PASSWORD_MIN_LENGTH = int(data.get("PASSWORD_MIN_LENGTH", 8))

    # Links in outgoing email
    CLIENT_URL = data.get("CLIENT_URL", "http://localhost:5100")
    SITE_NAME = data.get("SITE_NAME", "Madarik")

    # Mail (Resend)
    RESEND_API_KEY = data.get("RESEND_API_KEY", "")
    RESEND_API_URL = data.get("RESEND_API_URL", "https://api.resend.com/emails")
    FROM_EMAIL = data.get("FROM_EMAIL", "")
    FROM_NAME = data.get("FROM_NAME", "Madarik")
    MAIL_TIMEOUT_SECONDS = float(data.get("MAIL_TIMEOUT_SECONDS", 10))

    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
