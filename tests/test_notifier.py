"""
CRM webhook notifier and background dispatch.
"""

import asyncio
import json

import httpx
import pytest

from marketing_site.core.notifier import (
    NullNotifier,
    SubmissionNotifier,
    WebhookNotifier,
    build_crm_payload,
    dispatch_notification,
)
from marketing_site.models.contact import ContactSubmission


def make_submission(**overrides):
    values = {
        "name": "Maria Santos",
        "email": "maria@example.com",
        "company": "Santos Bakery",
        "service": "chatbot",
        "message": "We need a chatbot for orders.",
        "timestamp": "2026-01-15T08:00:00+00:00",
        "ip": "203.0.113.7",
        "userAgent": "Mozilla/5.0",
    }
    values.update(overrides)
    return ContactSubmission(**values)


def test_notifier_base_requires_notify():
    with pytest.raises(TypeError):
        SubmissionNotifier()


def test_crm_payload_shape():
    payload = build_crm_payload(make_submission())
    assert payload["name"] == "Maria Santos"
    assert payload["source"] == "MNL-AI Website"
    assert payload["tags"] == ["chatbot", "website-lead"]
    assert payload["customFields"] == {
        "company": "Santos Bakery",
        "message": "We need a chatbot for orders.",
        "serviceInterest": "chatbot",
    }


def test_crm_payload_skips_empty_service_tag():
    assert build_crm_payload(make_submission(service=""))["tags"] == ["website-lead"]


def test_webhook_notifier_posts_payload():
    received = []

    def handler(request: httpx.Request):
        received.append((str(request.url), json.loads(request.content)))
        return httpx.Response(200, json={"ok": True})

    notifier = WebhookNotifier("https://crm.example.com/hooks/abc", transport=httpx.MockTransport(handler))
    asyncio.run(notifier.notify(make_submission()))

    assert len(received) == 1
    url, body = received[0]
    assert url == "https://crm.example.com/hooks/abc"
    assert body["email"] == "maria@example.com"


def test_webhook_notifier_logs_non_success(caplog):
    notifier = WebhookNotifier(
        "https://crm.example.com/hooks/abc",
        transport=httpx.MockTransport(lambda request: httpx.Response(503)),
    )
    asyncio.run(notifier.notify(make_submission()))
    assert any("503" in r.getMessage() for r in caplog.records)


# ---- Dispatch ----
class RaisingNotifier(SubmissionNotifier):
    async def notify(self, submission):
        raise RuntimeError("webhook down")


class HangingNotifier(SubmissionNotifier):
    async def notify(self, submission):
        await asyncio.sleep(10)


def test_dispatch_success():
    assert asyncio.run(dispatch_notification(NullNotifier(), make_submission(), timeout=1.0)) is True


def test_dispatch_swallows_errors(caplog):
    assert asyncio.run(dispatch_notification(RaisingNotifier(), make_submission(), timeout=1.0)) is False
    assert any("webhook down" in r.getMessage() for r in caplog.records)


def test_dispatch_times_out():
    assert asyncio.run(dispatch_notification(HangingNotifier(), make_submission(), timeout=0.05)) is False


def test_dispatch_handles_transport_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    notifier = WebhookNotifier("https://crm.example.com/hooks/abc", transport=httpx.MockTransport(handler))
    assert asyncio.run(dispatch_notification(notifier, make_submission(), timeout=1.0)) is False
