"""
Job Service

Create, fetch and delete job postings. Server-owned fields are stamped
here: ``status`` starts Active, ``postedBy`` comes from the verified caller
and ``createdAt`` from the clock. None of them is ever updated afterwards.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from ..auth import Principal
from ..errors import NotFoundError, StoreError, ValidationError
from ..models import REQUIRED_JOB_FIELDS, JobStatus
from ..repositories import JobRepositoryInterface

logger = logging.getLogger(__name__)

# Fields a client may set on creation
CLIENT_FIELDS = ("title", "company", "location", "type", "salary", "description", "hrEmail")


def _utcnow() -> datetime:
    # Millisecond precision, matching what MongoDB stores
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def parse_job_id(job_id: str) -> ObjectId:
    """Convert a path id to ObjectId; malformed ids cannot exist, so NotFound."""
    try:
        return ObjectId(job_id)
    except (InvalidId, TypeError):
        raise NotFoundError("Job not found")


class JobService:
    """CRUD over job postings with validation and identity stamping."""

    def __init__(
        self,
        repository: JobRepositoryInterface,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.repository = repository
        self.clock = clock

    async def _call(self, operation: str, func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except PyMongoError as e:
            logger.error(f"Job store {operation} failed: {e}")
            raise StoreError("Server error") from e

    @staticmethod
    def validate_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Keep client-settable fields and check the required ones.

        Raises:
            ValidationError: if a required field is missing or blank
        """
        missing = [
            name for name in REQUIRED_JOB_FIELDS
            if not isinstance(payload.get(name), str) or not payload[name].strip()
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        document = {name: payload[name] for name in CLIENT_FIELDS if payload.get(name) is not None}
        document.setdefault("type", "Full-time")
        document.setdefault("description", "")
        return document

    async def create_job(self, payload: Dict[str, Any], principal: Principal) -> Dict[str, Any]:
        """
        Insert a new posting on behalf of ``principal``.

        Returns:
            The stored document including its generated ``_id``
        """
        document = self.validate_payload(payload)
        document.update({
            "status": JobStatus.ACTIVE.value,
            "postedBy": principal.id,
            "createdAt": self.clock(),
        })

        result = await self._call("insert", self.repository.insert_one, document)
        document["_id"] = ObjectId(result.inserted_id)
        logger.info(f"Created job {result.inserted_id} ({document['title']!r}) for {principal.id}")
        return document

    async def get_job(self, job_id: str) -> Dict[str, Any]:
        """Fetch one posting or raise NotFoundError."""
        object_id = parse_job_id(job_id)
        job: Optional[Dict[str, Any]] = await self._call(
            "lookup", self.repository.find_one, {"_id": object_id}
        )
        if job is None:
            raise NotFoundError("Job not found")
        return job

    async def delete_job(self, job_id: str, principal: Optional[Principal] = None) -> None:
        """
        Hard-delete a posting.

        Raises:
            NotFoundError: if no posting has this id
        """
        object_id = parse_job_id(job_id)
        result = await self._call("delete", self.repository.delete_one, {"_id": object_id})
        if result.matched_count == 0:
            raise NotFoundError("Job not found")
        logger.info(f"Deleted job {job_id}" + (f" by {principal.id}" if principal else ""))
