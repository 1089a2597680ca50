"""
Job Search Service

Listing and type-ahead suggestions over the job store.

Matching is always a case-insensitive substring test: user text is escaped
before it becomes a regex, so ``"c++"`` or ``"(remote)"`` match literally.

Empty input is treated differently per operation:
    - list_jobs: empty query matches every posting (list views show all)
    - suggest_*: empty fragment returns [] without touching the store
"""

import asyncio
import logging
import re
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from ..errors import StoreError
from ..models import ANY_JOB_TYPE
from ..repositories import JobRepositoryInterface

logger = logging.getLogger(__name__)

# Newest first; _id breaks createdAt ties by insertion order
LIST_SORT = [("createdAt", DESCENDING), ("_id", DESCENDING)]

# Suggestions scan in insertion order so results are repeatable
SUGGEST_SORT = [("_id", ASCENDING)]

DEFAULT_SUGGESTION_LIMIT = 10


def _contains(text: str) -> Dict[str, str]:
    return {"$regex": re.escape(text), "$options": "i"}


def _equals_ignore_case(text: str) -> Dict[str, str]:
    return {"$regex": f"^{re.escape(text)}$", "$options": "i"}


def build_list_filter(
    query: Optional[str] = "",
    job_type: Optional[str] = None,
    company: Optional[str] = None,
    location: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the MongoDB filter for a job listing.

    ``query`` matches title OR company; the structured filters are ANDed on
    top. ``company`` is combined with ``$and`` so it narrows the query match
    instead of replacing it.
    """
    query = query or ""
    filter_query: Dict[str, Any] = {
        "$or": [
            {"title": _contains(query)},
            {"company": _contains(query)},
        ]
    }

    clauses = []
    if job_type and job_type != ANY_JOB_TYPE:
        clauses.append({"type": _equals_ignore_case(job_type)})
    if company:
        clauses.append({"company": _contains(company)})
    if location:
        clauses.append({"location": _contains(location)})

    if clauses:
        filter_query = {"$and": [filter_query, *clauses]}

    return filter_query


def build_suggest_filter(field: str, fragment: str) -> Dict[str, Any]:
    """Filter for postings whose ``field`` contains ``fragment``."""
    return {field: _contains(fragment)}


def distinct_in_order(values: List[Any]) -> List[Any]:
    """De-duplicate on the literal value, keeping first occurrences."""
    seen = set()
    result = []
    for value in values:
        if value is None or value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result


class JobSearchService:
    """
    Read-only search over the job store.

    Each public method performs exactly one repository call, executed in a
    worker thread so the event loop is never blocked on storage I/O.
    """

    def __init__(
        self,
        repository: JobRepositoryInterface,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
    ):
        self.repository = repository
        self.suggestion_limit = suggestion_limit

    async def _find(self, filter_query: Dict[str, Any], **kwargs) -> List[Dict[str, Any]]:
        try:
            return await asyncio.to_thread(self.repository.find, filter_query, **kwargs)
        except PyMongoError as e:
            logger.error(f"Job store query failed: {e}")
            raise StoreError("Server error") from e

    async def list_jobs(
        self,
        query: Optional[str] = "",
        job_type: Optional[str] = None,
        company: Optional[str] = None,
        location: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        List postings matching the query and filters, newest first.

        Args:
            query: Substring matched against title or company; empty matches all
            job_type: Exact (case-insensitive) type; None/"" or "Any" disables it
            company: Substring filter on company
            location: Substring filter on location

        Returns:
            Every matching posting document; no pagination
        """
        filter_query = build_list_filter(query, job_type, company, location)
        jobs = await self._find(filter_query, sort=LIST_SORT)
        logger.debug(f"list_jobs q={query!r} type={job_type!r} -> {len(jobs)} jobs")
        return jobs

    async def _suggest(self, field: str, fragment: Optional[str]) -> List[str]:
        if not fragment:
            return []
        jobs = await self._find(
            build_suggest_filter(field, fragment),
            projection={field: 1},
            sort=SUGGEST_SORT,
            limit=self.suggestion_limit,
        )
        return distinct_in_order([job.get(field) for job in jobs])

    async def suggest_titles(self, fragment: Optional[str]) -> List[str]:
        """Distinct titles containing ``fragment``, at most ``suggestion_limit``."""
        titles = await self._suggest("title", fragment)
        return titles[: self.suggestion_limit]

    async def suggest_locations(self, fragment: Optional[str]) -> List[str]:
        """Distinct locations containing ``fragment`` among the scanned postings."""
        return await self._suggest("location", fragment)
