"""
Fixtures for HTTP tests: the application with a private, in-memory store.
"""
import pytest
from fastapi.testclient import TestClient

from order_tracker.api.app import app
from order_tracker.api.dependencies import get_order_store


@pytest.fixture
def api_store(store):
    app.dependency_overrides[get_order_store] = lambda: store
    yield store
    app.dependency_overrides.clear()


@pytest.fixture
def client(api_store):
    """Test client for FastAPI app (lifespan not started)."""
    return TestClient(app)
