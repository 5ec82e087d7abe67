from email_validator import EmailNotValidError, validate_email

from libs.result import Error, Result, Return

BCRYPT_MAX_BYTES = 72


def normalize_email(email: str) -> str:
    """Emails are compared and stored case-insensitively"""
    return email.strip().lower()


def validate_email_address(email: str) -> Result[str]:
    """Return the normalized address, or INVALID_EMAIL"""
    email = normalize_email(email or "")
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        return Return.err(Error("INVALID_EMAIL", str(e)))
    return Return.ok(email)


def validate_password(password: str, min_length: int = 8) -> Result[None]:
    """Reject passwords bcrypt cannot hash faithfully or that are too short"""
    if len(password) < min_length:
        return Return.err(
            Error(
                "INVALID_PASSWORD",
                f"Password must be at least {min_length} characters long",
            )
        )

    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return Return.err(
            Error(
                "INVALID_PASSWORD",
                f"Password must be at most {BCRYPT_MAX_BYTES} bytes long",
            )
        )

    if password.strip() == "":
        return Return.err(Error("INVALID_PASSWORD", "Password cannot be blank"))

    return Return.ok(None)
