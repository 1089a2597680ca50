"""
Job Routes

Endpoints:
    GET    /api/jobs                    - List jobs (q, jobType, company, location)
    GET    /api/jobs/suggest-jobs       - Title suggestions for a typed fragment
    GET    /api/jobs/suggest-locations  - Location suggestions for a typed fragment
    POST   /api/jobs/upload-resume      - Store a résumé (multipart field "resume")
    GET    /api/jobs/resume/{filename}  - Download a stored résumé
    GET    /api/jobs/{job_id}           - Single job
    POST   /api/jobs                    - Create job (auth)
    DELETE /api/jobs/{job_id}           - Delete job (auth)

Static paths are registered before ``/{job_id}`` so they are not captured
as ids.
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import FileResponse

from ..auth import Principal, verify_token
from ..config import get_settings
from ..models import (
    JobCreateRequest,
    JobListResponse,
    JobPosting,
    MessageResponse,
    UploadResponse,
)
from ..repositories import get_job_repository
from ..services import JobSearchService, JobService, ResumeStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


# =============================================================================
# Dependencies
# =============================================================================

def get_search_service() -> JobSearchService:
    """Get JobSearchService bound to the configured repository."""
    return JobSearchService(
        get_job_repository(),
        suggestion_limit=get_settings().suggestion_limit,
    )


def get_job_service() -> JobService:
    """Get JobService bound to the configured repository."""
    return JobService(get_job_repository())


def get_resume_storage() -> ResumeStorage:
    """Get ResumeStorage for the configured upload directory."""
    settings = get_settings()
    return ResumeStorage(settings.upload_dir, max_bytes=settings.max_upload_bytes)


# =============================================================================
# Suggestions
# =============================================================================

@router.get("/suggest-jobs", response_model=List[str])
async def suggest_jobs(q: Optional[str] = Query(None, description="Typed title fragment")):
    """Up to 10 distinct titles containing ``q``; ``[]`` when ``q`` is empty."""
    return await get_search_service().suggest_titles(q)


@router.get("/suggest-locations", response_model=List[str])
async def suggest_locations(q: Optional[str] = Query(None, description="Typed location fragment")):
    """Distinct locations containing ``q``; ``[]`` when ``q`` is empty."""
    return await get_search_service().suggest_locations(q)


# =============================================================================
# Résumé upload / download
# =============================================================================

@router.post("/upload-resume", response_model=UploadResponse)
async def upload_resume(resume: Optional[UploadFile] = File(None)):
    """
    Store an uploaded résumé and return its generated name.

    The caller keeps ``filePath`` and passes it to ``/resume/{filename}``.
    """
    storage = get_resume_storage()
    # save() raises ValidationError when no file part was sent
    filename = resume.filename if resume is not None else None
    stream = resume.file if resume is not None else None
    name = await asyncio.to_thread(storage.save, filename, stream)
    return UploadResponse(filePath=name)


@router.get("/resume/{filename}")
async def get_resume(filename: str):
    """Serve a stored résumé file."""
    path = get_resume_storage().resolve(filename)
    return FileResponse(path, filename=filename)


# =============================================================================
# CRUD
# =============================================================================

@router.get("", response_model=JobListResponse)
async def list_jobs(
    q: str = Query("", description="Substring matched against title or company"),
    jobType: Optional[str] = Query(None, description="Exact job type; 'Any' disables"),
    company: Optional[str] = Query(None, description="Company substring"),
    location: Optional[str] = Query(None, description="Location substring"),
):
    """List matching jobs, newest first."""
    jobs = await get_search_service().list_jobs(
        query=q,
        job_type=jobType,
        company=company,
        location=location,
    )
    return JobListResponse(data=[JobPosting.from_document(job) for job in jobs])


@router.get("/{job_id}", response_model=JobPosting)
async def get_job(job_id: str):
    """Get a single job."""
    job = await get_job_service().get_job(job_id)
    return JobPosting.from_document(job)


@router.post("", response_model=JobPosting, status_code=201)
async def create_job(
    request: JobCreateRequest,
    principal: Principal = Depends(verify_token),
):
    """Create a job posted by the authenticated caller."""
    job = await get_job_service().create_job(request.model_dump(), principal)
    return JobPosting.from_document(job)


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(job_id: str, principal: Principal = Depends(verify_token)):
    """Delete a job; unknown ids answer 404."""
    await get_job_service().delete_job(job_id, principal)
    return MessageResponse(message="Deleted")
