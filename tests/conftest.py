"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from api.config import APIConfig
from api.main import create_app
from api.store import BookStore


@pytest.fixture
def test_settings():
    """Settings with console logging and debug details enabled."""
    return APIConfig(debug=True, log_format="console")


@pytest.fixture
def book_store():
    """Store preloaded with the three sample books."""
    return BookStore.with_sample_data()


@pytest.fixture
def empty_store():
    """Store with no books."""
    return BookStore()


@pytest.fixture
def app(book_store, test_settings):
    """Application serving a fresh seeded store."""
    return create_app(store=book_store, settings=test_settings)


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)
