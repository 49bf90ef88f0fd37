"""
Global test fixtures for setdb.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Settings with development values
- FastAPI test client
"""

import sys
from pathlib import Path
from typing import Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from setdb.config import Settings, get_settings  # noqa: E402

DEV_PASSWORD = "DevPassword123"


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_settings():
    """
    Factory for Settings that ignores any local .env file.

    Usage:
        def test_something(make_settings):
            settings = make_settings(on_existing="strict")
    """
    def _make(**overrides) -> Settings:
        values = {"app_db_password": DEV_PASSWORD}
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    """Settings reproducing the development bootstrap."""
    return make_settings()


# =============================================================================
# MongoDB Fixtures (mongomock)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app():
    """
    Create FastAPI app for testing.

    Note: This imports the actual app and should be used with mocked
    database connections.
    """
    from setdb.main import app
    return app


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.
    """
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
