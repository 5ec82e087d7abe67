from datetime import datetime

import pytest

from madarik_identity.app.services import email_templates
from madarik_identity.app.services.notifier import IdentityNotifier
from tests.fixtures.fakes import OutboxMailTransport

EXPIRES = datetime(2025, 1, 22, 9, 0, 0)


def test_invitation_email_escapes_inviter_message():
    subject, html, text = email_templates.invitation_email(
        site_name="Madarik",
        role="MANAGER",
        accept_url="https://app.madarik.com/auth/accept-invite?token=abc",
        expires_at=EXPIRES,
        message="<script>alert(1)</script>",
    )

    assert subject == "Your invitation to Madarik"
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "<script>alert(1)</script>" in text
    assert "Role: MANAGER" in text


def test_invitation_reminder_subject():
    subject, _, _ = email_templates.invitation_email(
        site_name="Madarik",
        role="ADMIN",
        accept_url="https://app.madarik.com/auth/accept-invite?token=abc",
        expires_at=EXPIRES,
        reminder=True,
    )

    assert subject == "Invitation reminder to Madarik"


def test_password_reset_email_contains_link_and_expiry():
    subject, html, text = email_templates.password_reset_email(
        "Madarik", "https://app.madarik.com/auth/reset-password?token=xyz", EXPIRES
    )

    assert subject == "Reset your Madarik password"
    assert "https://app.madarik.com/auth/reset-password?token=xyz" in text
    assert "Wed, 22 Jan 2025 09:00 UTC" in text
    assert "token=xyz" in html


@pytest.mark.asyncio
async def test_notifier_builds_links_from_settings(settings):
    outbox = OutboxMailTransport()
    notifier = IdentityNotifier(outbox, settings)

    sent = await notifier.send_invitation(
        to="new@madarik.com", token="tok-123", role="MANAGER", expires_at=EXPIRES
    )

    assert sent is True
    email = outbox.last_to("new@madarik.com")
    assert "https://app.madarik.com/auth/accept-invite?token=tok-123" in email.text
    assert email.token == "tok-123"


@pytest.mark.asyncio
async def test_notifier_reports_failed_delivery_without_raising(settings, caplog):
    notifier = IdentityNotifier(OutboxMailTransport(fail=True), settings)

    sent = await notifier.send_password_reset(
        to="user@madarik.com", token="tok", expires_at=EXPIRES
    )

    assert sent is False
    assert "not delivered" in caplog.text
