"""Tests for the mail relay notifier, using httpx.MockTransport in place of the relay."""
import json
from datetime import datetime, timezone

import httpx
import pytest

from portfolio_api.core.config import Settings
from portfolio_api.core.notifications import MailNotifier, build_notification_body
from portfolio_api.models.contact import ContactSubmission


@pytest.fixture
def submission():
    return ContactSubmission(
        id="64b7f0c2e4b0a1a2b3c4d5e6",
        name="Ada Lovelace",
        email="ada@example.com",
        subject="Collaboration",
        message="Let's build an engine.",
        createdAt=datetime(2026, 1, 5, 12, 30, tzinfo=timezone.utc),
        ipAddress="198.51.100.7",
        userAgent="Mozilla/5.0",
    )


def make_notifier(handler, **overrides):
    options = dict(
        api_url="https://mail.example.test/v3/mail/send",
        api_key="secret-key",
        notify_email="owner@example.com",
        from_email="site@example.com",
        transport=httpx.MockTransport(handler),
    )
    options.update(overrides)
    return MailNotifier(**options)


@pytest.mark.asyncio
async def test_notification_sent(submission):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(202)

    result = await make_notifier(handler).notify(submission)

    assert result.sent is True
    assert result.error is None
    assert len(requests) == 1
    request = requests[0]
    assert request.headers["Authorization"] == "Bearer secret-key"
    payload = json.loads(request.content)
    assert payload["personalizations"][0]["to"][0]["email"] == "owner@example.com"
    assert payload["reply_to"]["email"] == "ada@example.com"
    assert payload["subject"] == "New contact form submission: Collaboration"
    assert "Let's build an engine." in payload["content"][0]["value"]


@pytest.mark.asyncio
async def test_relay_error_status_reported(submission):
    result = await make_notifier(lambda request: httpx.Response(500, text="boom")).notify(submission)

    assert result.sent is False
    assert "500" in result.error


@pytest.mark.asyncio
async def test_transport_failure_reported(submission):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = await make_notifier(handler).notify(submission)

    assert result.sent is False
    assert "connection refused" in result.error


@pytest.mark.asyncio
async def test_unconfigured_notifier_skips_network(submission):
    def handler(request):
        raise AssertionError("no request expected")

    result = await make_notifier(handler, api_key=None).notify(submission)

    assert result.sent is False
    assert result.error == "not configured"


def test_from_settings_defaults_sender_to_operator():
    settings = Settings(_env_file=None, mail_api_key="k", notify_email="owner@example.com")

    notifier = MailNotifier.from_settings(settings)

    assert notifier.configured is True
    assert notifier.from_email == "owner@example.com"
    assert notifier.api_url == "https://api.sendgrid.com/v3/mail/send"


def test_body_lists_all_fields(submission):
    body = build_notification_body(submission)

    for expected in ("Ada Lovelace", "ada@example.com", "Collaboration", "198.51.100.7", "Mozilla/5.0"):
        assert expected in body
