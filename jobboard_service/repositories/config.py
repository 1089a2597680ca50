"""
Repository Factory

Returns the job store implementation selected by configuration:
MongoDB when MONGODB_URI is set, the in-memory store otherwise.
"""

import logging
from typing import Optional

from ..config import get_settings
from .base import JobRepositoryInterface

logger = logging.getLogger(__name__)

# Singleton repository instance
_repository_instance: Optional[JobRepositoryInterface] = None


def get_job_repository() -> JobRepositoryInterface:
    """
    Get the job repository instance.

    Uses singleton pattern so the MongoDB connection pool (or the
    in-memory store's contents) is shared across requests.
    """
    global _repository_instance

    if _repository_instance is None:
        settings = get_settings()

        if settings.mongodb_uri:
            from .mongo_repository import MongoJobRepository
            _repository_instance = MongoJobRepository(
                mongodb_uri=settings.mongodb_uri,
                database=settings.mongo_db_name,
                collection=settings.jobs_collection,
            )
            logger.info("Initialized MongoDB job repository")
        else:
            from .memory_repository import InMemoryJobRepository
            _repository_instance = InMemoryJobRepository()
            logger.warning("MONGODB_URI not set, initialized in-memory job repository")

    return _repository_instance


def set_job_repository(repository: JobRepositoryInterface) -> None:
    """Install a specific repository (tests, embedding)."""
    global _repository_instance
    _repository_instance = repository


def reset_repository() -> None:
    """
    Reset the repository singleton.

    Used for testing or when configuration changes.
    """
    global _repository_instance

    if _repository_instance is not None:
        from .mongo_repository import MongoJobRepository
        if isinstance(_repository_instance, MongoJobRepository):
            MongoJobRepository.reset_connection()

    _repository_instance = None
    logger.info("Repository singleton reset")
