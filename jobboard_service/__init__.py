"""Package marker for the job board service.

Serves job listings, type-ahead suggestions and résumé uploads over FastAPI.
"""

__version__ = "0.1.0"
