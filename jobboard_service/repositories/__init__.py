"""
Repository Pattern for the job postings store.

Public API:
- get_job_repository(): Factory to get the configured repository instance
- JobRepositoryInterface: Abstract interface for the jobs collection
- WriteResult: Result dataclass for write operations

Usage:
    from jobboard_service.repositories import get_job_repository

    repo = get_job_repository()
    jobs = repo.find({"type": "Contract"}, sort=[("createdAt", -1)])
"""

from .base import JobRepositoryInterface, WriteResult
from .config import get_job_repository, reset_repository, set_job_repository
from .memory_repository import InMemoryJobRepository, match_document

__all__ = [
    "get_job_repository",
    "reset_repository",
    "set_job_repository",
    "JobRepositoryInterface",
    "InMemoryJobRepository",
    "match_document",
    "WriteResult",
]
