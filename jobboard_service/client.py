"""
Job Board API Client.

Thin ``requests`` wrapper over the HTTP API. Credentials are passed to each
mutating call explicitly; the client keeps no token state between calls.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30  # seconds


class JobBoardClientError(Exception):
    """Non-2xx response or transport failure."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class JobBoardClient:
    """Client for the ``/api/jobs`` endpoints."""

    def __init__(
        self,
        base_url: str = "http://localhost:5001",
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @staticmethod
    def _auth_headers(token: str) -> Dict[str, str]:
        if not token:
            raise ValueError("token is required for this call")
        return {"Authorization": f"Bearer {token}"}

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}/api/jobs{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.Timeout:
            raise JobBoardClientError(504, "Job board API timeout")
        except requests.exceptions.ConnectionError:
            raise JobBoardClientError(503, "Cannot connect to job board API")

        if not response.ok:
            try:
                body = response.json()
                message = body.get("message") or body.get("detail") or response.reason
            except ValueError:
                message = response.text or response.reason
            logger.debug(f"{method} {url} -> {response.status_code}: {message}")
            raise JobBoardClientError(response.status_code, str(message))
        return response

    # Reads

    def list_jobs(
        self,
        q: str = "",
        job_type: Optional[str] = None,
        company: Optional[str] = None,
        location: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params = {"q": q}
        if job_type:
            params["jobType"] = job_type
        if company:
            params["company"] = company
        if location:
            params["location"] = location
        return self._request("GET", "", params=params).json()["data"]

    def get_job(self, job_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/{job_id}").json()

    def suggest_jobs(self, q: str) -> List[str]:
        return self._request("GET", "/suggest-jobs", params={"q": q}).json()

    def suggest_locations(self, q: str) -> List[str]:
        return self._request("GET", "/suggest-locations", params={"q": q}).json()

    def fetch_resume(self, name: str) -> bytes:
        return self._request("GET", f"/resume/{name}").content

    # Writes

    def create_job(self, data: Dict[str, Any], token: str) -> Dict[str, Any]:
        """Create a posting as the principal ``token`` was issued to."""
        return self._request("POST", "", json=data, headers=self._auth_headers(token)).json()

    def delete_job(self, job_id: str, token: str) -> None:
        self._request("DELETE", f"/{job_id}", headers=self._auth_headers(token))

    def upload_resume(self, filename: str, content: bytes) -> str:
        """Upload a résumé; returns the server-generated storage name."""
        response = self._request("POST", "/upload-resume", files={"resume": (filename, content)})
        return response.json()["filePath"]
