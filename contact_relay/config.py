"""
Process-wide configuration.

Settings are read from the environment once at startup and frozen;
handlers receive the same instance by reference.
"""

import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_EMAIL_SUBJECT = "New Contact Form Submission"
DEFAULT_SENDER_NAME = "Website Contact Form"
DEFAULT_REPLY_SUBJECT = "Re: Your inquiry"


class Settings(BaseModel):
    """Immutable configuration for the contact form relay."""

    model_config = ConfigDict(frozen=True)

    notification_email: str = Field(..., min_length=1, description="通知の送信先アドレス")
    email_subject: str = DEFAULT_EMAIL_SUBJECT
    sender_name: str = DEFAULT_SENDER_NAME
    reply_subject: str = DEFAULT_REPLY_SUBJECT
    display_timezone: str = "UTC"

    row_store: str = "sqlite"
    db_path: str = "contact_submissions.db"

    mail_sender: str = "smtp"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""

    cors_origins: tuple[str, ...] = ()

    @field_validator("display_timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {value}") from e
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.display_timezone)


def load_settings() -> Settings:
    """
    Build Settings from environment variables (and a .env file if present).

    NOTIFICATION_EMAIL is required; everything else has a default.
    """
    load_dotenv()

    origins = os.getenv("CORS_ORIGINS", "")

    return Settings(
        notification_email=os.getenv("NOTIFICATION_EMAIL", ""),
        email_subject=os.getenv("EMAIL_SUBJECT", DEFAULT_EMAIL_SUBJECT),
        display_timezone=os.getenv("DISPLAY_TIMEZONE", "UTC"),
        row_store=os.getenv("ROW_STORE", "sqlite").lower(),
        db_path=os.getenv("DB_PATH", "contact_submissions.db"),
        mail_sender=os.getenv("MAIL_SENDER", "smtp").lower(),
        smtp_host=os.getenv("SMTP_HOST", "smtp.gmail.com"),
        smtp_port=int(os.getenv("SMTP_PORT", "587")),
        smtp_user=os.getenv("SMTP_USER", ""),
        smtp_password=os.getenv("SMTP_PASSWORD", ""),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )
