"""Display helpers shared by the stored row and the notification email."""

import html
from datetime import datetime, tzinfo

from contact_relay.schemas.contact import PHONE_NOT_PROVIDED


def format_display_timestamp(value: datetime, tz: tzinfo) -> str:
    """
    Render a submission time for people, e.g. "January 1, 2024, 12:00 PM UTC".

    Month name in full, hour as two-digit 12-hour clock, zone abbreviation of ``tz``.
    """
    local = value.astimezone(tz)
    return (
        f"{local.strftime('%B')} {local.day}, {local.year}, "
        f"{local.strftime('%I:%M %p')} {local.strftime('%Z')}"
    )


def normalize_phone(phone: str | None) -> str:
    if phone is None or not phone.strip():
        return PHONE_NOT_PROVIDED
    return phone


def comment_to_html(comment: str) -> str:
    """Escape the comment for HTML and turn line breaks into <br>."""
    escaped = html.escape(comment.replace("\r\n", "\n"))
    return escaped.replace("\n", "<br>")
