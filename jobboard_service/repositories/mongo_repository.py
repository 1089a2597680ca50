"""
MongoDB Job Repository

pymongo-backed implementation of the job store.
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection

from .base import JobRepositoryInterface, WriteResult

logger = logging.getLogger(__name__)


class MongoJobRepository(JobRepositoryInterface):
    """
    MongoDB repository for job postings.

    Connection Management:
    - Uses a class-level MongoClient for connection pooling
    - Client is created lazily and reused across requests
    - PyMongo handles the connection pool and its locking internally

    Error Handling:
    - Fail-fast: all PyMongoError exceptions propagate to caller
    """

    _client: Optional[MongoClient] = None

    def __init__(self, mongodb_uri: str, database: str = "jobboard", collection: str = "jobs"):
        """
        Initialize repository with connection parameters.

        Args:
            mongodb_uri: MongoDB connection string
            database: Database name
            collection: Collection name
        """
        if not mongodb_uri:
            raise ValueError("MongoDB URI is required")
        self._mongodb_uri = mongodb_uri
        self._database_name = database
        self._collection_name = collection

    def _get_client(self) -> MongoClient:
        if MongoJobRepository._client is None:
            MongoJobRepository._client = MongoClient(self._mongodb_uri)
            logger.info(
                f"Mongo repository connected: {self._database_name}.{self._collection_name}"
            )
        return MongoJobRepository._client

    def _get_collection(self) -> Collection:
        return self._get_client()[self._database_name][self._collection_name]

    @classmethod
    def reset_connection(cls) -> None:
        """Close and drop the shared client."""
        if cls._client is not None:
            cls._client.close()
            cls._client = None
            logger.info("Mongo repository connection reset")

    def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self._get_collection().find_one(filter)

    def find(
        self,
        filter: Dict[str, Any],
        projection: Optional[Dict[str, Any]] = None,
        sort: Optional[List[tuple]] = None,
        limit: int = 0,
        skip: int = 0,
    ) -> List[Dict[str, Any]]:
        cursor = self._get_collection().find(filter, projection)

        if sort:
            cursor = cursor.sort(sort)
        if skip > 0:
            cursor = cursor.skip(skip)
        if limit > 0:
            cursor = cursor.limit(limit)

        return list(cursor)

    def count_documents(self, filter: Dict[str, Any]) -> int:
        return self._get_collection().count_documents(filter)

    def insert_one(self, document: Dict[str, Any]) -> WriteResult:
        result = self._get_collection().insert_one(document)
        return WriteResult(
            matched_count=0,
            modified_count=1,
            inserted_id=str(result.inserted_id),
        )

    def delete_one(self, filter: Dict[str, Any]) -> WriteResult:
        result = self._get_collection().delete_one(filter)
        return WriteResult(
            matched_count=result.deleted_count,
            modified_count=result.deleted_count,
        )

    def ensure_indexes(self) -> None:
        collection = self._get_collection()
        collection.create_index([("createdAt", DESCENDING), ("_id", DESCENDING)])
        collection.create_index([("type", ASCENDING)])
        logger.info(f"Ensured indexes on {self._database_name}.{self._collection_name}")
