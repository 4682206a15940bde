"""
Shared fixtures: in-memory store, app wired to it, and HTTP clients.
"""

import os
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from api_server import create_app
from app.admin.auth import ADMIN_COOKIE_NAME
from app.config import STORE_BACKEND_MEMORY, Settings
from app.store import MemoryStore
from app.submissions.models import SubmissionCreateRequest

ADMIN_TOKEN = "test-admin-token"
CRON_SECRET = "test-cron-secret"


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def settings():
    return Settings(
        store_backend=STORE_BACKEND_MEMORY,
        admin_access_token=ADMIN_TOKEN,
        cron_secret=CRON_SECRET,
    )


@pytest.fixture
def app(settings, store):
    return create_app(settings, store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin_client(app):
    """Client that already carries a valid admin cookie."""
    client = TestClient(app)
    client.cookies.set(ADMIN_COOKIE_NAME, ADMIN_TOKEN)
    return client


@pytest.fixture
def make_submission():
    """Factory for valid submission requests; keyword arguments override fields."""
    def _make(**overrides):
        data = {
            "title": "My Cool Project!!",
            "one_liner": "Built over a weekend",
            "locale": "nl",
            "tag_slugs": [],
            "tool_slugs": [],
            "stack_text": "",
            "email": "builder@example.com",
        }
        data.update(overrides)
        return SubmissionCreateRequest(**data)
    return _make
