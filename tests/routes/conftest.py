"""
Fixtures for HTTP route tests.

The app is used without entering TestClient as a context manager, so the
lifespan (which connects to Supabase and Gemini) never runs; the context
dependency is overridden instead.
"""
import pytest
from fastapi.testclient import TestClient

from kira.dependencies import get_app_context
from kira.main import app


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture
def override_context():
    """Serve the given AppContext to every route for the duration of a test."""
    def _override(context):
        app.dependency_overrides[get_app_context] = lambda: context
        return context

    yield _override

    # Clean up after test
    app.dependency_overrides.clear()


@pytest.fixture
def server_error_client():
    """
    Test client that returns 500 responses instead of re-raising.

    Starlette re-raises unhandled exceptions after the Exception handler has
    produced its response; this client lets tests inspect that response.
    """
    return TestClient(app, raise_server_exceptions=False)
