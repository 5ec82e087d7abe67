from madarik_identity.app.services.validation import validate_email_address, validate_password


def test_email_is_normalized():
    result = validate_email_address("  Agent@Madarik.COM ")

    assert result.is_ok()
    assert result.value == "agent@madarik.com"


def test_malformed_email_is_rejected():
    for email in ("", "not-an-email", "a@", "@x.com"):
        result = validate_email_address(email)
        assert result.is_err(), email
        assert result.error.code == "INVALID_EMAIL"


def test_password_rules():
    assert validate_password("P@ssw0rd1").is_ok()
    assert validate_password("short").error.code == "INVALID_PASSWORD"
    assert validate_password(" " * 12).error.code == "INVALID_PASSWORD"
    assert validate_password("x" * 73).error.code == "INVALID_PASSWORD"
    assert validate_password("abcdef", min_length=6).is_ok()
