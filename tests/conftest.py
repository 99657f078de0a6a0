"""
Test fixtures for the CFA admin console.

Provides app, client and auth_client fixtures. The backend REST API is
never contacted: `backend` patches the HTTP session the API client uses.
"""

import pytest
from unittest.mock import MagicMock, patch

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def app():
    from cfa_admin import create_app

    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret-key",
        "BACKEND_BASE_URL": "https://backend.test",
        "BACKEND_TIMEOUT": 5,
    })
    yield app


@pytest.fixture
def client(app):
    """Unauthenticated test client."""
    return app.test_client()


@pytest.fixture
def auth_client(app):
    """Test client with an admin token already in the session."""
    client = app.test_client()
    with client.session_transaction() as sess:
        sess["auth_token"] = "test-token"
        sess["username"] = "admin"
        sess["role"] = "admin"
    return client


@pytest.fixture
def make_response():
    """Factory for fake `requests` responses."""

    def _make(status_code=200, body=None):
        response = MagicMock()
        response.status_code = status_code
        response.ok = 200 <= status_code < 300
        if body is None:
            response.json.side_effect = ValueError("No JSON object could be decoded")
        else:
            response.json.return_value = body
        return response

    return _make


@pytest.fixture
def backend():
    """Patched requests.Session instance used by every ApiSession."""
    with patch("cfa_admin.services.api_client.requests.Session") as session_cls:
        yield session_cls.return_value
