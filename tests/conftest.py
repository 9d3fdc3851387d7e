"""
Pytest configuration and fixtures for contact_relay tests.
"""

import os
from unittest.mock import MagicMock

import pytest

# Set test environment before importing app modules
os.environ["NOTIFICATION_EMAIL"] = "owner@example.com"
os.environ["ROW_STORE"] = "memory"
os.environ["MAIL_SENDER"] = "console"

from contact_relay.config import Settings  # noqa: E402
from contact_relay.providers import InMemoryRowStore, MailSender  # noqa: E402
from contact_relay.services import SubmissionHandler  # noqa: E402


@pytest.fixture
def settings():
    return Settings(
        notification_email="owner@example.com",
        email_subject="New Contact Form Submission",
        row_store="memory",
        mail_sender="console",
    )


@pytest.fixture
def row_store():
    return InMemoryRowStore()


@pytest.fixture
def mail_sender():
    """Mock mail sender that records every send call."""
    return MagicMock(spec=MailSender)


@pytest.fixture
def handler(settings, row_store, mail_sender):
    return SubmissionHandler(settings, row_store, mail_sender)


@pytest.fixture
def sample_payload():
    """Submission used across tests (no phone)."""
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "comment": "Hello\nWorld",
        "timestamp": "2024-01-01T12:00:00Z",
    }
