"""
Shared Pydantic models for the job board service.

These models define the structure for API requests and responses.
Stored documents keep Mongo field names (``_id``, ``hrEmail``, ``createdAt``)
so existing front ends keep working.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Well-known values for JobPosting.type; others are accepted as-is.
JOB_TYPES = ("Full-time", "Part-time", "Contract", "Internship")

# Sentinel the listing filter treats as "no job type constraint".
ANY_JOB_TYPE = "Any"

REQUIRED_JOB_FIELDS = ("title", "company", "location", "hrEmail")


class JobStatus(str, Enum):
    """Lifecycle state of a posting."""
    ACTIVE = "Active"
    CLOSED = "Closed"


class JobCreateRequest(BaseModel):
    """Request body for creating a posting.

    Server-owned fields (``_id``, ``status``, ``postedBy``, ``createdAt``)
    are not part of the model and are dropped if a client sends them.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1, description="Job title")
    company: str = Field(..., min_length=1, description="Hiring company")
    location: str = Field(..., min_length=1, description="Job location")
    hrEmail: str = Field(..., min_length=1, description="Contact address for applicants")
    type: str = Field("Full-time", min_length=1, description="Employment type, e.g. Full-time")
    salary: Optional[str] = Field(None, description="Free-text salary range")
    description: str = Field("", description="Job description")

    @field_validator("title", "company", "location", "hrEmail", "type")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class JobPosting(BaseModel):
    """A stored job posting as returned by the API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    title: str
    company: str
    location: str
    type: str = "Full-time"
    salary: Optional[str] = None
    description: str = ""
    hrEmail: str
    status: JobStatus = JobStatus.ACTIVE
    postedBy: Optional[str] = None
    createdAt: datetime

    @field_validator("id", "postedBy", mode="before")
    @classmethod
    def stringify_object_id(cls, v: Any) -> Any:
        if isinstance(v, ObjectId):
            return str(v)
        return v

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "JobPosting":
        return cls.model_validate(document)


class JobListResponse(BaseModel):
    """Listing envelope: ``{"data": [...]}``."""

    data: List[JobPosting]


class MessageResponse(BaseModel):
    """Plain acknowledgement or error message."""

    message: str


class UploadResponse(BaseModel):
    """Response after storing a résumé."""

    message: str = "Resume uploaded successfully"
    filePath: str = Field(..., description="Generated storage name; pass it back to fetch the file")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    message: str
    storage: str
    timestamp: datetime
