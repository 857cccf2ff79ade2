"""Shared fixtures: a fresh app (and fresh stores) per test."""

import pytest
from fastapi.testclient import TestClient

from orchard.core.config import Settings
from orchard_web.main import create_app

from .helpers import TEST_SESSION_KEYS, FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    # Minimum bcrypt cost keeps the suite fast
    return Settings(session_keys=TEST_SESSION_KEYS, bcrypt_rounds=4)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def new_client(app):
    """Factory for extra clients (separate cookie jars) on the same app."""

    def _make() -> TestClient:
        return TestClient(app)

    return _make
