"""
Email bodies for identity notifications.

Every template returns (subject, html, text). User-supplied text is
HTML-escaped before it is embedded.
"""

from datetime import datetime
from html import escape
from typing import Optional, Tuple

EmailContent = Tuple[str, str, str]

_LAYOUT_HTML = """
<div style="font-family: -apple-system,Segoe UI,Roboto,Helvetica,Arial,sans-serif; background:#0f172a; color:#e2e8f0; padding:24px;">
  <table role="presentation" width="100%" cellspacing="0" cellpadding="0" style="max-width:640px; margin:0 auto; background:#111827; border:1px solid #1f2937; border-radius:12px; overflow:hidden;">
    <tr>
      <td style="padding:24px 24px 8px 24px;">
        <div style="font-size:22px; font-weight:700; color:#f8fafc;">{title}</div>
        {subtitle}
      </td>
    </tr>
    {note}
    <tr>
      <td style="padding:24px;">
        <div style="margin-bottom:12px; color:#cbd5e1;">{lead}</div>
        <a href="{link}" style="display:inline-block; background:#3b82f6; color:#0b1220; text-decoration:none; font-weight:600; padding:12px 18px; border-radius:10px;">{button}</a>
        <div style="margin-top:16px; font-size:12px; color:#94a3b8;">If the button doesn't work, copy and paste this link into your browser:</div>
        <div style="margin-top:6px; font-size:12px; color:#60a5fa; word-break:break-all;">{link}</div>
      </td>
    </tr>
    <tr>
      <td style="padding:0 24px 24px 24px; font-size:12px; color:#94a3b8;">{footer}</td>
    </tr>
  </table>
</div>
"""

_NOTE_HTML = """
    <tr>
      <td style="padding:8px 24px 0 24px;">
        <div style="background:#0b1220; border:1px solid #1e293b; padding:16px; border-radius:10px; color:#cbd5e1; white-space:pre-wrap;">{message}</div>
      </td>
    </tr>"""


def _render(
    title: str,
    lead: str,
    link: str,
    button: str,
    footer: str,
    subtitle: str = "",
    note: str = "",
) -> str:
    return _LAYOUT_HTML.format(
        title=escape(title),
        subtitle=subtitle,
        note=note,
        lead=escape(lead),
        link=escape(link, quote=True),
        button=escape(button),
        footer=escape(footer),
    )


def _format_expiry(expires_at: datetime) -> str:
    return expires_at.strftime("%a, %d %b %Y %H:%M UTC")


def invitation_email(
    site_name: str,
    role: str,
    accept_url: str,
    expires_at: datetime,
    message: Optional[str] = None,
    reminder: bool = False,
) -> EmailContent:
    if reminder:
        subject = f"Invitation reminder to {site_name}"
        title = f"Reminder: your {site_name} invitation"
    else:
        subject = f"Your invitation to {site_name}"
        title = f"You're invited to {site_name}"

    lead = "Click the button below to accept the invitation and set your password."
    footer = f"This link expires on {_format_expiry(expires_at)}."
    subtitle = (
        '<div style="margin-top:6px; font-size:14px; color:#94a3b8;">'
        f'Role: <strong style="color:#c7d2fe;">{escape(role)}</strong></div>'
    )
    custom = (message or "").strip()
    note = _NOTE_HTML.format(message=escape(custom)) if custom else ""

    html = _render(title, lead, accept_url, "Accept Invitation", footer, subtitle, note)

    text_lines = [title, "", f"Role: {role}"]
    if custom:
        text_lines += ["", custom]
    text_lines += ["", lead, accept_url, "", footer]
    return subject, html, "\n".join(text_lines)


def password_reset_email(
    site_name: str, reset_url: str, expires_at: datetime
) -> EmailContent:
    subject = f"Reset your {site_name} password"
    title = "Password reset request"
    lead = f"You requested a password reset for your {site_name} account."
    footer = (
        f"This link expires on {_format_expiry(expires_at)}. "
        "If you didn't request this, you can safely ignore this email."
    )
    html = _render(title, lead, reset_url, "Reset Password", footer)
    text = "\n".join([title, "", lead, reset_url, "", footer])
    return subject, html, text


def email_verification_email(
    site_name: str, verify_url: str, expires_at: datetime
) -> EmailContent:
    subject = f"Verify your {site_name} email"
    title = "Confirm your email address"
    lead = "Please confirm this address so we can reach you about your account."
    footer = f"This link expires on {_format_expiry(expires_at)}."
    html = _render(title, lead, verify_url, "Verify Email", footer)
    text = "\n".join([title, "", lead, verify_url, "", footer])
    return subject, html, text
