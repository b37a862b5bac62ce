"""Notification service — emails guest credentials.

Features:
- HTML + plain text credential email
- Log-only mode when SMTP credentials are not configured
- Every attempt recorded in credential_notifications
- Delivery failures reported, never raised to the caller
"""

from dataclasses import dataclass
from html import escape
from typing import Optional

import pytz
import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.services.expiration_service import as_utc
from app.config import get_settings
from app.core.exceptions import NotificationError
from app.domain.models.credential_notification import CredentialNotification
from app.domain.models.guest_account import GuestAccount
from app.infrastructure.smtp_mailer import SMTPMailer

settings = get_settings()
tz = pytz.timezone(settings.TIMEZONE)
logger = structlog.get_logger(__name__)

CREDENTIALS_SUBJECT = "Your Guest Access Credentials"


@dataclass(frozen=True)
class NotificationResult:
    success: bool
    message: str


def format_expiry(account: GuestAccount) -> str:
    return as_utc(account.expires_at).astimezone(tz).strftime("%b %d, %Y %H:%M %Z")


def format_credentials_text(account: GuestAccount, plain_password: str) -> str:
    expires = format_expiry(account)
    lines = [
        f"Dear {account.full_name or 'User'},",
        "",
        "Your guest access has been created successfully.",
        "",
        "LOGIN CREDENTIALS",
        f"Username: {account.username}",
        f"Password: {plain_password}",
        f"Access Expires: {expires}",
        "",
        "IMPORTANT NOTES",
        "- Please keep your credentials secure",
        f"- Your access will expire on {expires}",
        "- Contact the administrator if you need assistance",
        "",
        "This is an automated message. Please do not reply.",
    ]
    return "\n".join(lines)


def format_credentials_html(account: GuestAccount, plain_password: str) -> str:
    expires = escape(format_expiry(account))
    return f"""\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h1 style="font-size: 24px;">Welcome!</h1>
  <p>Dear {escape(account.full_name or 'User')}, your guest access has been created successfully.</p>
  <h2>Your Login Credentials</h2>
  <p><strong>Username:</strong> <code>{escape(account.username)}</code></p>
  <p><strong>Password:</strong> <code>{escape(plain_password)}</code></p>
  <p><strong>Access Expires:</strong> {expires}</p>
  <h3>Important Notes</h3>
  <ul>
    <li>Please keep your credentials secure</li>
    <li>Your access will expire on {expires}</li>
    <li>Contact the administrator if you need assistance</li>
  </ul>
  <p style="color: #6c757d; font-size: 14px;">This is an automated message. Please do not reply to this email.</p>
</div>
"""


def send_credentials(
    db: Session,
    account: GuestAccount,
    plain_password: str,
    mailer: Optional[SMTPMailer] = None,
) -> NotificationResult:
    """Email the guest their credentials.

    Without SMTP credentials the message is written to the log instead.
    Failures are logged and returned as an unsuccessful result.
    """
    log = CredentialNotification(
        guest_account_id=account.id,
        recipient=account.email,
        subject=CREDENTIALS_SUBJECT,
        status="pending",
    )
    db.add(log)

    text_body = format_credentials_text(account, plain_password)

    if mailer is None and not settings.email_configured:
        logger.warning(
            "Email not configured, logging credentials instead",
            to=account.email,
            username=account.username,
            body=text_body,
        )
        log.status = "logged"
        result = NotificationResult(True, "Credentials logged (email not configured)")
    else:
        try:
            mailer = mailer or SMTPMailer()
            mailer.send(
                account.email,
                CREDENTIALS_SUBJECT,
                text_body,
                format_credentials_html(account, plain_password),
            )
            log.status = "sent"
            result = NotificationResult(True, "Credentials sent to user email")
        except NotificationError as e:
            log.status = "failed"
            log.error = str(e.__cause__ or e)[:500]
            logger.error("Credential email failed", to=account.email, username=account.username, error=log.error)
            result = NotificationResult(False, "Failed to send email")
        except Exception as e:
            log.status = "failed"
            log.error = str(e)[:500]
            logger.exception("Unexpected error sending credential email", to=account.email, username=account.username)
            result = NotificationResult(False, "Failed to send email")

    try:
        db.commit()
    except SQLAlchemyError as e:
        # The guest account is already committed; only the audit row is lost
        db.rollback()
        logger.error("Failed to record credential notification", to=account.email, error=str(e))
    return result


def check_email_config(mailer: Optional[SMTPMailer] = None) -> bool:
    """Return True if SMTP is configured and reachable."""
    if mailer is None and not settings.email_configured:
        logger.warning("Email not configured; set EMAIL_USER and EMAIL_PASSWORD")
        return False
    mailer = mailer or SMTPMailer()
    ok = mailer.verify()
    if ok:
        logger.info("Email configuration is valid", host=mailer.host)
    return ok
