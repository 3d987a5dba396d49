"""
Pytest configuration and fixtures for the WiFi portal tests

MongoDB is disabled; every test gets a fresh in-memory store provider.
"""

import os

os.environ["MONGODB_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from wifi_portal.main import app  # noqa: E402
from wifi_portal.services.visitor_store import StoreProvider  # noqa: E402


@pytest.fixture
def provider():
    """Memory-only store provider"""
    return StoreProvider()


@pytest.fixture
def client(provider):
    """TestClient whose requests use the ``provider`` fixture"""
    with TestClient(app) as test_client:
        app.state.store_provider = provider
        yield test_client


@pytest.fixture
def make_registration():
    """Build a valid registration body, overriding any field"""
    def _make(**overrides):
        data = {
            "fullName": "María López",
            "phone": "+502 5555-1234",
            "email": "Maria.Lopez@Example.com",
        }
        data.update(overrides)
        return data
    return _make


@pytest.fixture
def register(client, make_registration):
    """POST a registration and return the response body"""
    def _register(**overrides):
        response = client.post("/api/register", json=make_registration(**overrides))
        assert response.status_code == 201, response.text
        return response.json()
    return _register
