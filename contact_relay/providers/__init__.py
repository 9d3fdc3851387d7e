"""
Provider package for row storage and mail delivery.
The submission handler depends only on RowStore and MailSender.
"""

from .mail_sender import ConsoleMailSender, MailSender, SMTPMailSender, get_mail_sender
from .row_store import InMemoryRowStore, RowStore, SQLiteRowStore, get_row_store

__all__ = [
    "MailSender",
    "SMTPMailSender",
    "ConsoleMailSender",
    "get_mail_sender",
    "RowStore",
    "InMemoryRowStore",
    "SQLiteRowStore",
    "get_row_store",
]
