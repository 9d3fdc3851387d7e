"""
お問い合わせ通知メールの組み立てと送信。

Builds the subject, HTML body and plain-text fallback for one submission and
hands them to the MailSender. A single send attempt is made.
"""

import html
from dataclasses import dataclass
from urllib.parse import quote

from contact_relay.config import Settings
from contact_relay.exceptions import NotificationFailure
from contact_relay.logger import get_service_logger
from contact_relay.providers.mail_sender import MailSender
from contact_relay.schemas.contact import SubmissionRecord

from .formatting import comment_to_html, normalize_phone

log = get_service_logger("Notification")

_EMAIL_STYLE = """
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif;
      line-height: 1.6;
      color: #1a1715;
      max-width: 600px;
      margin: 0 auto;
      padding: 20px;
    }
    .header { background: #4a6d5c; color: white; padding: 24px 32px; margin: -20px -20px 24px -20px; }
    .header h1 { margin: 0; font-size: 22px; font-weight: 500; }
    .content { background: #faf8f5; padding: 24px; border-radius: 4px; }
    .field { margin-bottom: 16px; }
    .label {
      font-size: 11px;
      font-weight: 600;
      text-transform: uppercase;
      letter-spacing: 0.05em;
      color: #7a7572;
      margin-bottom: 4px;
    }
    .value { font-size: 16px; color: #1a1715; }
    .message-box { background: white; border-left: 3px solid #4a6d5c; padding: 16px; margin-top: 8px; }
    .footer { margin-top: 24px; padding-top: 16px; border-top: 1px solid #e0dcd6; font-size: 13px; color: #7a7572; }
    .reply-btn {
      display: inline-block;
      background: #4a6d5c;
      color: white;
      padding: 12px 24px;
      text-decoration: none;
      margin-top: 16px;
    }
"""


@dataclass(frozen=True)
class NotificationMessage:
    to: str
    subject: str
    plain_body: str
    html_body: str
    reply_to: str
    display_name: str


class NotificationComposer:
    """Composes the notification for a submission and sends it once."""

    def __init__(self, settings: Settings, mail_sender: MailSender):
        self.settings = settings
        self.mail_sender = mail_sender

    def build_subject(self, record: SubmissionRecord) -> str:
        return f"{self.settings.email_subject} from {record.full_name}"

    def build_html_body(self, record: SubmissionRecord, display_timestamp: str) -> str:
        name = html.escape(record.full_name)
        email = html.escape(record.email)
        phone = html.escape(normalize_phone(record.phone))
        first_name = html.escape(record.first_name)
        reply_href = html.escape(
            f"mailto:{record.email}?subject={quote(self.settings.reply_subject)}"
        )

        return f"""<!DOCTYPE html>
<html>
<head>
  <style>{_EMAIL_STYLE}</style>
</head>
<body>
  <div class="header">
    <h1>New Contact Form Submission</h1>
  </div>

  <div class="content">
    <div class="field">
      <div class="label">Name</div>
      <div class="value">{name}</div>
    </div>

    <div class="field">
      <div class="label">Email</div>
      <div class="value"><a href="mailto:{email}">{email}</a></div>
    </div>

    <div class="field">
      <div class="label">Phone</div>
      <div class="value">{phone}</div>
    </div>

    <div class="field">
      <div class="label">Message</div>
      <div class="message-box">{comment_to_html(record.comment)}</div>
    </div>

    <a href="{reply_href}" class="reply-btn">Reply to {first_name}</a>
  </div>

  <div class="footer">
    Submitted on {html.escape(display_timestamp)}
  </div>
</body>
</html>
"""

    def build_plain_body(self, record: SubmissionRecord, display_timestamp: str) -> str:
        return (
            "New Contact Form Submission\n\n"
            f"Name: {record.full_name}\n"
            f"Email: {record.email}\n"
            f"Phone: {normalize_phone(record.phone)}\n\n"
            f"Message:\n{record.comment}\n\n"
            "---\n"
            f"Submitted on {display_timestamp}\n"
        )

    def compose(self, record: SubmissionRecord, display_timestamp: str) -> NotificationMessage:
        return NotificationMessage(
            to=self.settings.notification_email,
            subject=self.build_subject(record),
            plain_body=self.build_plain_body(record, display_timestamp),
            html_body=self.build_html_body(record, display_timestamp),
            reply_to=record.email,
            display_name=self.settings.sender_name,
        )

    def compose_and_send(self, record: SubmissionRecord, display_timestamp: str) -> None:
        """
        Send the notification for ``record``.

        Raises:
            NotificationFailure: the transport rejected or could not deliver the message
        """
        message = self.compose(record, display_timestamp)
        try:
            self.mail_sender.send(
                message.to,
                message.subject,
                message.plain_body,
                html_body=message.html_body,
                reply_to=message.reply_to,
                display_name=message.display_name,
            )
        except NotificationFailure:
            raise
        except Exception as e:
            raise NotificationFailure(str(e)) from e

        log.info("send", "Notification sent", to=message.to, reply_to=message.reply_to)
