"""
Contacts API — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh per test):
    ├── fake_clock:     deterministic timestamps, +1s per reading
    ├── store:          empty ContactStore using fake_clock
    ├── seeded_store:   ContactStore holding the three example contacts
    ├── service:        ContactService over `store`
    ├── sample_payload: valid creation body
    └── test_client:    HTTPX AsyncClient talking to an app built on `store`
"""

import os
from datetime import datetime, timedelta, timezone

# Override settings for testing BEFORE any app imports
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.main import create_app
from app.services.contact_service import ContactService
from app.store import ContactStore


class FakeClock:
    """Returns a strictly increasing UTC time, one second per call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def store(fake_clock):
    """An empty store; no example contacts to collide with."""
    return ContactStore(clock=fake_clock)


@pytest.fixture
def seeded_store(fake_clock):
    return ContactStore(seed=True, clock=fake_clock)


@pytest.fixture
def service(store):
    return ContactService(store)


@pytest.fixture
def sample_payload():
    return {"name": "张三", "phone": "13800138001"}


@pytest_asyncio.fixture
async def test_client(store):
    """
    HTTPX AsyncClient routed straight into a fresh app via ASGITransport.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
