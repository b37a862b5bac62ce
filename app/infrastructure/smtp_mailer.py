"""SMTP client for outgoing credential emails.

Retries transient failures with a linear backoff and raises
NotificationError once every attempt has failed.
"""

import smtplib
import time
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

import structlog

from app.config import get_settings
from app.core.exceptions import NotificationError

settings = get_settings()
logger = structlog.get_logger(__name__)


class SMTPMailer:
    """Sends multipart (plain text + HTML) messages over SMTP."""

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: Optional[str] = None,
        use_tls: Optional[bool] = None,
    ):
        self.host = host or settings.SMTP_HOST
        self.port = port or settings.SMTP_PORT
        self.username = username if username is not None else settings.EMAIL_USER
        self.password = password if password is not None else settings.EMAIL_PASSWORD
        self.sender = sender or settings.EMAIL_FROM or self.username
        self.use_tls = settings.SMTP_USE_TLS if use_tls is None else use_tls
        self.timeout = settings.SMTP_TIMEOUT
        self.max_retries = 3
        self.retry_delay = 2  # seconds

    def _connect(self) -> smtplib.SMTP:
        server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        if self.use_tls:
            server.starttls()
        if self.username:
            server.login(self.username, self.password)
        return server

    def build_message(self, to_email: str, subject: str, text_body: str, html_body: Optional[str] = None) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["From"] = self.sender
        message["To"] = to_email
        message["Subject"] = subject
        message.attach(MIMEText(text_body, "plain", "utf-8"))
        if html_body:
            message.attach(MIMEText(html_body, "html", "utf-8"))
        return message

    def send(self, to_email: str, subject: str, text_body: str, html_body: Optional[str] = None) -> None:
        """Send one message, retrying up to max_retries times."""
        message = self.build_message(to_email, subject, text_body, html_body)

        last_error = None
        for attempt in range(1, self.max_retries + 1):
            try:
                with self._connect() as server:
                    server.send_message(message)
                logger.info("Email sent", to=to_email, attempt=attempt)
                return
            except smtplib.SMTPAuthenticationError as e:
                # Credentials will not fix themselves between attempts
                logger.error("SMTP authentication failed", host=self.host, error=str(e))
                raise NotificationError("Email authentication failed") from e
            except (smtplib.SMTPException, OSError) as e:
                last_error = e
                logger.warning(
                    "SMTP send failed",
                    to=to_email,
                    attempt=attempt,
                    max_retries=self.max_retries,
                    error=str(e),
                )

            if attempt < self.max_retries:
                time.sleep(self.retry_delay * attempt)

        raise NotificationError(
            f"Failed to send email after {self.max_retries} attempts"
        ) from last_error

    def verify(self) -> bool:
        """Open a connection and authenticate, without sending anything."""
        try:
            with self._connect() as server:
                server.noop()
            return True
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Email configuration check failed", host=self.host, error=str(e))
            return False
