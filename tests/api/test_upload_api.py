"""
API tests for résumé upload and download.
"""

import re
from pathlib import Path

from fastapi.testclient import TestClient

from jobboard_service.config import get_settings

MIB = 1024 * 1024


def stored_files():
    upload_dir = Path(get_settings().upload_dir)
    if not upload_dir.exists():
        return []
    return list(upload_dir.iterdir())


def test_upload_and_download(client: TestClient):
    content = b"%PDF-1.4 " + b"x" * 1024

    response = client.post(
        "/api/jobs/upload-resume",
        files={"resume": ("résumé (final).pdf", content, "application/pdf")},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Resume uploaded successfully"
    name = data["filePath"]
    assert re.fullmatch(r"[A-Za-z0-9._]+", name)
    assert name.endswith("_final_.pdf")

    download = client.get(f"/api/jobs/resume/{name}")
    assert download.status_code == 200
    assert download.content == content


def test_upload_too_large_is_rejected(client: TestClient):
    response = client.post(
        "/api/jobs/upload-resume",
        files={"resume": ("big.pdf", b"\0" * (6 * MIB), "application/pdf")},
    )

    assert response.status_code == 413
    assert stored_files() == []


def test_upload_without_file_is_400(client: TestClient):
    response = client.post("/api/jobs/upload-resume")

    assert response.status_code == 400
    assert response.json() == {"message": "No file uploaded"}


def test_download_missing_is_404(client: TestClient):
    response = client.get("/api/jobs/resume/1718000000000_nope.pdf")
    assert response.status_code == 404


def test_download_traversal_is_404(client: TestClient):
    response = client.get("/api/jobs/resume/..%2F..%2Fsetup.py")
    assert response.status_code == 404
