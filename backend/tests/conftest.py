"""
QuickNotes Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── note_store:   Empty NoteStore with a fixed id seed
    ├── fake_clock:   Deterministic clock, one second per tick
    ├── note_service: NoteService over note_store + fake_clock
    └── test_client:  HTTPX AsyncClient against a fresh create_app()
"""

import os
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["NOTES_PREFIX"] = "/api/notes"

from app.main import create_app  # noqa: E402
from app.services.note_service import NoteService  # noqa: E402
from app.storage import NoteStore  # noqa: E402


class FakeClock:
    """Returns a strictly increasing UTC time on every call."""

    def __init__(self, start: datetime = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)):
        self.now = start
        self.calls = 0

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        self.calls += 1
        return current


@pytest.fixture
def note_store():
    """A fresh, empty store per test."""
    return NoteStore(id_seed=1000)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def note_service(note_store, fake_clock):
    return NoteService(note_store, clock=fake_clock)


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for endpoint testing.

    Each test gets its own app (and therefore its own empty store).
    raise_app_exceptions=False lets tests observe the 500 response that the
    catch-all handler produces instead of the re-raised exception.
    """
    app = create_app()
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        client.app = app
        yield client
