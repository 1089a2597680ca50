"""
FastAPI application for the job board.

Wires configuration, logging, CORS, the job routes and the error handlers
that turn domain errors into HTTP responses.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import get_settings, validate_config_on_startup
from .errors import JobBoardError
from .logger import setup_logging
from .models import HealthResponse
from .repositories import InMemoryJobRepository, get_job_repository
from .routes import jobs_router

settings = get_settings()
setup_logging(settings.log_level, settings.log_format)
logger = logging.getLogger(__name__)

# Validate configuration at startup
validate_config_on_startup()

app = FastAPI(title="Job Board API", version=__version__)

if settings.cors_origins_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

app.include_router(jobs_router)


# =============================================================================
# Error handlers
# =============================================================================

@app.exception_handler(JobBoardError)
async def job_board_error_handler(request: Request, exc: JobBoardError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.__cause__ or exc}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = sorted({
        ".".join(str(part) for part in error.get("loc", ())[1:]) or "body"
        for error in exc.errors()
    })
    logger.info(f"Rejected {request.method} {request.url.path}: invalid {fields}")
    return JSONResponse(
        status_code=400,
        content={"message": f"Invalid or missing fields: {', '.join(fields)}"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"message": "Server error"})


# =============================================================================
# Lifecycle & health
# =============================================================================

@app.on_event("startup")
async def ensure_indexes() -> None:
    """Create store indexes; a failure is logged, not fatal."""
    try:
        get_job_repository().ensure_indexes()
    except Exception as e:
        logger.error(f"Failed to ensure job store indexes: {e}")


@app.get("/api/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe."""
    repository = get_job_repository()
    storage = "memory" if isinstance(repository, InMemoryJobRepository) else "mongodb"
    return HealthResponse(
        status="Active",
        message="Server is running smoothly",
        storage=storage,
        timestamp=datetime.now(timezone.utc),
    )
