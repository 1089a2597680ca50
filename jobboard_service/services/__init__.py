"""Service layer: search/suggest, job CRUD and résumé storage."""

from .job_service import JobService
from .resume_storage import ResumeStorage, sanitize_filename
from .search_service import JobSearchService, build_list_filter, build_suggest_filter

__all__ = [
    "JobService",
    "JobSearchService",
    "ResumeStorage",
    "build_list_filter",
    "build_suggest_filter",
    "sanitize_filename",
]
