"""
Repository Interface Definitions

Defines the abstract interface for job store operations so the service
layer works the same against MongoDB and the in-memory store.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class WriteResult:
    """
    Result of a write operation.

    Attributes:
        matched_count: Number of documents that matched the filter
        modified_count: Number of documents actually modified (or deleted)
        inserted_id: ID of the inserted document (insert_one only)
    """
    matched_count: int
    modified_count: int
    inserted_id: Optional[str] = None


class JobRepositoryInterface(ABC):
    """
    Abstract interface for the job postings collection.

    Implementations:
    - MongoJobRepository: pymongo-backed
    - InMemoryJobRepository: process-local, for development and tests

    Filters and sort specs use MongoDB query syntax. All methods are
    fail-fast: storage errors propagate to the caller.
    """

    @abstractmethod
    def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Find a single job document.

        Args:
            filter: MongoDB query filter (e.g., {"_id": ObjectId(...)})

        Returns:
            Document dict if found, None otherwise
        """
        pass

    @abstractmethod
    def find(
        self,
        filter: Dict[str, Any],
        projection: Optional[Dict[str, Any]] = None,
        sort: Optional[List[tuple]] = None,
        limit: int = 0,
        skip: int = 0,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple job documents.

        Args:
            filter: MongoDB query filter
            projection: Fields to include/exclude
            sort: Sort order as list of (field, direction) tuples
            limit: Maximum documents to return (0 = no limit)
            skip: Number of documents to skip

        Returns:
            List of matching documents
        """
        pass

    @abstractmethod
    def count_documents(self, filter: Dict[str, Any]) -> int:
        """Count documents matching the filter."""
        pass

    @abstractmethod
    def insert_one(self, document: Dict[str, Any]) -> WriteResult:
        """
        Insert a single document.

        An ``_id`` is assigned when the document has none.

        Returns:
            WriteResult with inserted_id set to the new document's _id
        """
        pass

    @abstractmethod
    def delete_one(self, filter: Dict[str, Any]) -> WriteResult:
        """
        Delete a single document.

        Returns:
            WriteResult whose counts are the number of deleted documents
        """
        pass

    @abstractmethod
    def ensure_indexes(self) -> None:
        """Ensure indexes backing the default sort exist."""
        pass
