"""
Job board route modules.

Each module exposes an APIRouter the app includes.
"""

from .jobs import router as jobs_router

__all__ = [
    "jobs_router",
]
