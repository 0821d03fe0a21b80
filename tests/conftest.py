"""
Shared fixtures: every test builds its own app through create_app() with
explicit settings, so no test depends on the environment or on .env files.
"""

import pytest
from fastapi.testclient import TestClient

from marketing_site.core.config import Settings
from marketing_site.core.notifier import SubmissionNotifier
from marketing_site.main import create_app


VALID_SUBMISSION = {
    "name": "Maria Santos",
    "email": "Maria@Example.com",
    "company": "Santos Bakery",
    "service": "website",
    "message": "We need a new website for our bakery chain.",
}


def make_settings(**overrides) -> Settings:
    values = {
        "environment": "development",
        "strict_validation": True,
        "rate_limiting": False,
        "processing_delay_seconds": 0.0,
        "crm_webhook_url": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class RecordingNotifier(SubmissionNotifier):
    def __init__(self):
        self.submissions = []

    async def notify(self, submission):
        self.submissions.append(submission)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_client(notifier):
    """Build a TestClient for an app configured with the given settings overrides."""

    def _make(raise_server_exceptions=True, **overrides):
        app = create_app(settings=make_settings(**overrides), notifier=notifier)
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    return _make


@pytest.fixture
def strict_client(make_client):
    return make_client(strict_validation=True)


@pytest.fixture
def simple_client(make_client):
    return make_client(strict_validation=False)
