"""
Integration tests for the FastAPI endpoints.
"""

import json

import pytest
from fastapi.testclient import TestClient

from contact_relay.config import Settings
from contact_relay.exceptions import StorageFailure
from contact_relay.main import create_app
from contact_relay.providers import ConsoleMailSender


@pytest.fixture
def mail():
    return ConsoleMailSender()


@pytest.fixture
def client(settings, row_store, mail):
    app = create_app(settings, row_store=row_store, mail_sender=mail)
    with TestClient(app) as client:
        yield client


def test_root_endpoint(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "message": "Contact form handler is active"}


def test_submit(client, row_store, mail, sample_payload):
    response = client.post("/", json=sample_payload)

    assert response.status_code == 200
    assert response.json() == {"status": "success", "message": "Form submitted successfully"}
    assert row_store.rows()[0][:4] == [
        "January 1, 2024, 12:00 PM UTC",
        "Ada",
        "Lovelace",
        "ada@example.com",
    ]
    assert len(mail.sent) == 1
    assert mail.sent[0]["subject"] == "New Contact Form Submission from Ada Lovelace"


def test_submit_plain_text_content_type(client, row_store, sample_payload):
    """Browsers posting with text/plain to avoid a CORS preflight are still accepted."""
    response = client.post(
        "/",
        content=json.dumps(sample_payload),
        headers={"Content-Type": "text/plain;charset=utf-8"},
    )

    assert response.json()["status"] == "success"
    assert len(row_store.rows()) == 1


def test_malformed_body_returns_200_with_error(client, row_store, mail):
    response = client.post("/", content=b"not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 200
    assert response.json()["status"] == "error"
    assert row_store.rows() == []
    assert len(mail.sent) == 0


def test_storage_failure_returns_200_with_error(client, row_store, mail, sample_payload):
    def broken(columns):
        raise StorageFailure("database is locked")

    row_store.append_row = broken

    response = client.post("/", json=sample_payload)

    assert response.status_code == 200
    assert response.json() == {"status": "error", "message": "database is locked"}
    assert len(mail.sent) == 0


def test_cors_headers(row_store, mail):
    settings = Settings(notification_email="owner@example.com", cors_origins=("https://example.com",))
    app = create_app(settings, row_store=row_store, mail_sender=mail)

    with TestClient(app) as client:
        response = client.get("/", headers={"Origin": "https://example.com"})

    assert response.headers["access-control-allow-origin"] == "https://example.com"


def test_out_of_range_timestamp_returns_200_with_error(settings, row_store, mail, sample_payload):
    app = create_app(settings, row_store=row_store, mail_sender=mail)
    payload = dict(sample_payload, timestamp="0001-01-01T00:00:00+01:00")

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.post("/", json=payload)

    assert response.status_code == 200
    assert response.json()["status"] == "error"
    assert row_store.rows() == []
    assert len(mail.sent) == 0
