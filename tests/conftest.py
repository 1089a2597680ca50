"""
Global fixtures for the job board tests.

Environment variables are set BEFORE anything imports jobboard_service so
JobBoardSettings is built from the test configuration.
"""

import os
from datetime import datetime, timedelta

# Set test environment BEFORE any imports from jobboard_service
os.environ["ENVIRONMENT"] = "development"
os.environ["AUTH_SECRET"] = "test-secret-key-1234"  # Min 16 chars
os.environ.pop("MONGODB_URI", None)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest

from jobboard_service.auth import Principal
from jobboard_service.config import get_settings
from jobboard_service.repositories import InMemoryJobRepository, reset_repository, set_job_repository

TEST_SECRET = "test-secret-key-1234"


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch, tmp_path):
    """Fresh settings per test with uploads going to a temp directory."""
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.delenv("MONGODB_URI", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    reset_repository()


@pytest.fixture
def repository():
    """In-memory job store installed as the process-wide repository."""
    repo = InMemoryJobRepository()
    set_job_repository(repo)
    return repo


@pytest.fixture
def principal():
    return Principal(id="hr-user-1")


@pytest.fixture
def make_job():
    """Build stored job documents with increasing createdAt."""
    base = datetime(2024, 5, 1, 9, 0, 0)
    counter = {"n": 0}

    def _make(title, company="Acme", location="Remote", type="Full-time", **extra):
        counter["n"] += 1
        doc = {
            "title": title,
            "company": company,
            "location": location,
            "type": type,
            "hrEmail": "hr@example.com",
            "description": "",
            "status": "Active",
            "postedBy": "hr-user-1",
            "createdAt": base + timedelta(minutes=counter["n"]),
        }
        doc.update(extra)
        return doc

    return _make
