"""
Mail sender abstraction layer.
Supports SMTP (default) and a console sender that only logs the message.
"""

import smtplib
from collections import deque
from abc import ABC, abstractmethod
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from contact_relay.config import Settings
from contact_relay.exceptions import NotificationFailure
from contact_relay.logger import get_service_logger

log = get_service_logger("Mail")


class MailSender(ABC):
    """Abstract interface for mail transports."""

    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        plain_body: str,
        *,
        html_body: str | None = None,
        reply_to: str | None = None,
        display_name: str | None = None,
    ) -> None:
        """Send one message. Raises NotificationFailure on any transport error."""
        ...


def build_message(
    sender: str,
    to: str,
    subject: str,
    plain_body: str,
    html_body: str | None = None,
    reply_to: str | None = None,
    display_name: str | None = None,
) -> MIMEMultipart:
    """Build a multipart/alternative message with plain and optional HTML parts."""
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = formataddr((display_name, sender)) if display_name else sender
    msg["To"] = to
    if reply_to:
        msg["Reply-To"] = reply_to

    msg.attach(MIMEText(plain_body, "plain", "utf-8"))
    if html_body is not None:
        msg.attach(MIMEText(html_body, "html", "utf-8"))
    return msg


class SMTPMailSender(MailSender):
    """SMTP transport using STARTTLS and login credentials."""

    def __init__(self, host: str, port: int, user: str, password: str):
        self.host = host
        self.port = port
        self.user = user
        self.password = password

    def send(
        self,
        to: str,
        subject: str,
        plain_body: str,
        *,
        html_body: str | None = None,
        reply_to: str | None = None,
        display_name: str | None = None,
    ) -> None:
        if not self.user or not self.password:
            raise NotificationFailure("SMTP credentials are not configured")

        msg = build_message(
            self.user, to, subject, plain_body, html_body, reply_to, display_name
        )

        try:
            with smtplib.SMTP(self.host, self.port) as server:
                server.ehlo()
                server.starttls()
                server.login(self.user, self.password)
                server.sendmail(self.user, [to], msg.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            log.error("send", "Failed to send email", to=to, error=str(exc))
            raise NotificationFailure(str(exc)) from exc

        log.info("send", "Email sent", to=to)


class ConsoleMailSender(MailSender):
    """Logs the message instead of delivering it. Useful for local runs."""

    def __init__(self, keep_last: int = 50):
        self.sent: deque[dict] = deque(maxlen=keep_last)

    def send(
        self,
        to: str,
        subject: str,
        plain_body: str,
        *,
        html_body: str | None = None,
        reply_to: str | None = None,
        display_name: str | None = None,
    ) -> None:
        message = {
            "to": to,
            "subject": subject,
            "plain_body": plain_body,
            "html_body": html_body,
            "reply_to": reply_to,
            "display_name": display_name,
        }
        self.sent.append(message)
        log.info("send", "Email written to log", to=to, subject=subject, body=plain_body)


def get_mail_sender(settings: Settings) -> MailSender:
    """
    Build the configured mail sender.

    MAIL_SENDER:
    - "smtp" (default): SMTP_HOST / SMTP_PORT / SMTP_USER / SMTP_PASSWORD
    - "console": log only
    """
    if settings.mail_sender == "console":
        return ConsoleMailSender()
    if settings.mail_sender == "smtp":
        if not settings.smtp_user or not settings.smtp_password:
            log.warning("init", "SMTP credentials not configured. Notifications will fail.")
        return SMTPMailSender(
            settings.smtp_host,
            settings.smtp_port,
            settings.smtp_user,
            settings.smtp_password,
        )
    raise ValueError(f"Unknown mail sender: {settings.mail_sender}")
