"""Pytest bootstrap configuration.

Storage settings are set before any module that reads application settings
is imported; no test talks to a real object store.
"""
import os

os.environ.setdefault("STORAGE__ENDPOINT", "minio.test")
os.environ.setdefault("STORAGE__PORT", "9000")
os.environ.setdefault("STORAGE__USE_SSL", "false")
os.environ.setdefault("STORAGE__ACCESS_KEY", "test-access-key")
os.environ.setdefault("STORAGE__SECRET_KEY", "test-secret-key")
os.environ.setdefault("STORAGE__BUCKET", "documents")
os.environ.setdefault("STORAGE__VERIFY_ON_STARTUP", "false")

import pytest

from tests.fakes import FakeStoragePort


@pytest.fixture
def fake_storage() -> FakeStoragePort:
    return FakeStoragePort()


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    from infrastructure.rate_limiter import limiter

    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def app(fake_storage):
    """Application wired to the in-memory storage port."""
    from api.dependencies import get_storage_port
    from main import app as fastapi_app

    fastapi_app.state.storage = object()  # lifespan must not build a real client
    fastapi_app.dependency_overrides[get_storage_port] = lambda: fake_storage
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()
    fastapi_app.state.storage = None


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)
