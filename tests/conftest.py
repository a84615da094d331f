"""
Pytest configuration and shared fixtures for test suite.

This module provides:
- Test client fixtures for FastAPI
- A mocked Supabase client with one mock per table
- Settings overrides for YouTube/OAuth configuration
- Shared sample URLs
"""

import os
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from unittest.mock import patch, MagicMock


TEST_USER_ID = "user-1"


@pytest.fixture(scope="session")
def mock_env_vars():
    """Mock environment variables for testing."""
    with patch.dict(os.environ, {
        "ALLOWED_ORIGIN": "*",
        "SUPABASE_URL": "http://supabase.test",
        "SUPABASE_SERVICE_KEY": "test-service-key",
        "YOUTUBE_API_KEY": "",
        "APP_BASE_URL": "http://app.test",
        "LOG_LEVEL": "WARNING",
    }):
        yield


@pytest.fixture
def tables():
    """One MagicMock per Supabase table, so query chains on different tables don't collide."""
    return {name: MagicMock(name=name) for name in ("projects", "segments", "queue_items")}


@pytest.fixture
def mock_supabase(tables):
    """Supabase client whose auth accepts any token as TEST_USER_ID."""
    supabase = MagicMock()
    supabase.table.side_effect = lambda name: tables[name]
    supabase.auth.get_user.return_value = MagicMock(
        user=MagicMock(id=TEST_USER_ID, email="user@example.com")
    )
    return supabase


@pytest.fixture
def auth_headers():
    """Return headers with a bearer token."""
    return {"Authorization": "Bearer test-token"}


@pytest_asyncio.fixture
async def client(mock_env_vars, mock_supabase):
    """
    Create async test client for FastAPI app.

    Uses httpx AsyncClient with ASGITransport to test the FastAPI app
    without needing to run a server. The Supabase dependency is replaced
    with mock_supabase.
    """
    # Import app after env vars are mocked
    from main import app
    from clipqueue.dependencies import get_db

    app.dependency_overrides[get_db] = lambda: mock_supabase

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def override_settings(mock_env_vars):
    """Install a Settings instance built from the given env-style values for route dependencies."""
    from main import app
    from clipqueue.config import Settings, get_settings

    def _override(**values):
        settings = Settings(**values)
        app.dependency_overrides[get_settings] = lambda: settings
        return settings

    return _override


@pytest.fixture
def youtube_url():
    """Sample YouTube URL for testing."""
    return "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


@pytest.fixture
def vimeo_url():
    """Sample Vimeo URL for testing."""
    return "https://vimeo.com/123456789"


def mock_response(json_data=None, status_code=200, text=None):
    """requests.Response stand-in."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = json_data
    response.text = text if text is not None else ""
    return response
