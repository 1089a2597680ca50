"""
Error taxonomy for the job board service.

Every error carries the HTTP status the API layer answers with, so routes
raise domain errors and the app-level handlers do the mapping.
"""


class JobBoardError(Exception):
    """Base class for expected service failures."""

    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
        self.message = message


class ValidationError(JobBoardError):
    """Missing required posting fields or a malformed submission."""

    status_code = 400


class NotFoundError(JobBoardError):
    """Missing job posting or résumé file."""

    status_code = 404


class PayloadTooLargeError(JobBoardError):
    """Upload exceeded the configured size ceiling."""

    status_code = 413


class StoreError(JobBoardError):
    """The job store failed; detail stays in the server log."""

    status_code = 500
