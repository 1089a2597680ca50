"""
Fixtures for API tests: FastAPI TestClient and auth headers.
"""

import pytest
from fastapi.testclient import TestClient

from jobboard_service.auth import issue_token

TEST_SECRET = "test-secret-key-1234"


@pytest.fixture
def client(repository):
    """FastAPI test client backed by the in-memory repository."""
    from jobboard_service.app import app
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth_headers():
    """Authentication headers for principal hr-user-1."""
    return {"Authorization": f"Bearer {issue_token('hr-user-1', TEST_SECRET)}"}


@pytest.fixture
def invalid_auth_headers():
    """Invalid authentication headers for testing auth failures."""
    return {"Authorization": "Bearer hr-user-1.deadbeef"}
