"""Pytest fixtures for the contact API test suite."""
from typing import List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from portfolio_api.core.config import Settings
from portfolio_api.core.errors import DependencyError
from portfolio_api.core.notifications import NotificationResult
from portfolio_api.main import create_app
from portfolio_api.models.contact import ContactSubmission
from portfolio_api.models.education import EducationRecord


class InMemoryStore:
    """Stand-in for MongoStore keeping documents in lists."""

    def __init__(self):
        self.contacts: List[ContactSubmission] = []
        self.education: List[EducationRecord] = []
        self.fail = False
        self.writes = 0

    def _check(self):
        if self.fail:
            raise DependencyError(reason="store unavailable")

    async def create_contact(self, submission):
        self._check()
        self.writes += 1
        saved = submission.model_copy(update={"id": str(ObjectId())})
        self.contacts.append(saved)
        return saved

    async def list_contacts(self):
        self._check()
        return sorted(self.contacts, key=lambda c: c.createdAt, reverse=True)

    async def get_contact(self, contact_id) -> Optional[ContactSubmission]:
        self._check()
        return next((c for c in self.contacts if c.id == contact_id), None)

    async def delete_contact(self, contact_id) -> bool:
        self._check()
        contact = await self.get_contact(contact_id)
        if contact is None:
            return False
        self.contacts.remove(contact)
        return True

    async def list_education(self):
        self._check()
        return list(self.education)


class FakeNotifier:
    """Records notifications and answers with a configurable outcome."""

    configured = True

    def __init__(self):
        self.sent = []
        self.fail = False

    async def notify(self, submission):
        if self.fail:
            return NotificationResult(sent=False, error="relay unavailable")
        self.sent.append(submission)
        return NotificationResult(sent=True)


@pytest.fixture
def settings():
    return Settings(_env_file=None, mongodb_url=None, notify_email="owner@example.com")


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def client(settings, store, notifier):
    """Test client with the in-memory store and notifier wired in"""
    app = create_app(settings=settings, store=store, notifier=notifier)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def valid_payload():
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "subject": "Collaboration",
        "message": "I enjoyed your portfolio and would like to talk."
    }
