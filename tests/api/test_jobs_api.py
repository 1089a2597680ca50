"""
API tests for the /api/jobs listing, suggestion and CRUD endpoints.
"""

from unittest.mock import MagicMock

from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from jobboard_service.repositories import set_job_repository

JOB_BODY = {
    "title": "Backend Engineer",
    "company": "Acme",
    "location": "Berlin",
    "type": "Full-time",
    "salary": "€70k",
    "description": "APIs all day",
    "hrEmail": "hr@acme.test",
}


def create(client, auth_headers, **overrides):
    response = client.post("/api/jobs", json={**JOB_BODY, **overrides}, headers=auth_headers)
    assert response.status_code == 201
    return response.json()


def test_health_check(client: TestClient):
    response = client.get("/api/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "Active"
    assert data["storage"] == "memory"
    assert "timestamp" in data


class TestCreate:

    def test_requires_auth(self, client: TestClient):
        response = client.post("/api/jobs", json=JOB_BODY)
        assert response.status_code == 401

    def test_invalid_auth(self, client: TestClient, invalid_auth_headers: dict):
        response = client.post("/api/jobs", json=JOB_BODY, headers=invalid_auth_headers)
        assert response.status_code == 401

    def test_creates_with_server_fields(self, client: TestClient, auth_headers: dict):
        body = {**JOB_BODY, "postedBy": "mallory", "status": "Closed", "_id": "abc"}

        response = client.post("/api/jobs", json=body, headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert ObjectId.is_valid(data["_id"])
        assert data["status"] == "Active"
        assert data["postedBy"] == "hr-user-1"
        assert data["title"] == "Backend Engineer"
        assert "createdAt" in data

    def test_missing_required_field_is_400(self, client: TestClient, auth_headers: dict):
        body = {k: v for k, v in JOB_BODY.items() if k != "hrEmail"}

        response = client.post("/api/jobs", json=body, headers=auth_headers)

        assert response.status_code == 400
        assert "hrEmail" in response.json()["message"]

    def test_blank_title_is_400(self, client: TestClient, auth_headers: dict):
        response = client.post("/api/jobs", json={**JOB_BODY, "title": "  "}, headers=auth_headers)
        assert response.status_code == 400


class TestRead:

    def test_get_by_id(self, client: TestClient, auth_headers: dict):
        created = create(client, auth_headers)

        response = client.get(f"/api/jobs/{created['_id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_get_unknown_id(self, client: TestClient):
        response = client.get(f"/api/jobs/{ObjectId()}")
        assert response.status_code == 404
        assert response.json() == {"message": "Job not found"}

    def test_get_malformed_id(self, client: TestClient):
        assert client.get("/api/jobs/not-an-id").status_code == 404

    def test_list_empty_query_returns_all_newest_first(self, client: TestClient, auth_headers: dict):
        create(client, auth_headers, title="First")
        create(client, auth_headers, title="Second")
        create(client, auth_headers, title="Third")

        response = client.get("/api/jobs")

        assert response.status_code == 200
        assert [job["title"] for job in response.json()["data"]] == ["Third", "Second", "First"]

    def test_list_query_and_filters(self, client: TestClient, auth_headers: dict):
        create(client, auth_headers, title="Backend Engineer", company="Acme", type="Backend")
        create(client, auth_headers, title="Frontend Dev", company="Acme", type="Frontend")
        create(client, auth_headers, title="Backend Lead", company="Globex", location="Paris", type="Backend")

        def titles(**params):
            data = client.get("/api/jobs", params=params).json()["data"]
            return sorted(job["title"] for job in data)

        assert titles(q="backend") == ["Backend Engineer", "Backend Lead"]
        assert titles(q="acme") == ["Backend Engineer", "Frontend Dev"]
        assert titles(q="backend", jobType="Backend", location="paris") == ["Backend Lead"]
        assert titles(jobType="Any") == ["Backend Engineer", "Backend Lead", "Frontend Dev"]
        assert titles(company="glob") == ["Backend Lead"]

    def test_store_failure_is_generic_500(self, client: TestClient):
        repo = MagicMock()
        repo.find.side_effect = ServerSelectionTimeoutError("db-host-7:27017 refused")
        set_job_repository(repo)

        response = client.get("/api/jobs")

        assert response.status_code == 500
        assert response.json() == {"message": "Server error"}


class TestSuggest:

    def test_suggest_jobs(self, client: TestClient, auth_headers: dict):
        create(client, auth_headers, title="Backend Engineer")
        create(client, auth_headers, title="Frontend Dev")
        create(client, auth_headers, title="Backend Engineer")

        response = client.get("/api/jobs/suggest-jobs", params={"q": "e"})

        assert response.status_code == 200
        assert response.json() == ["Backend Engineer", "Frontend Dev"]

    def test_suggest_without_q_is_empty(self, client: TestClient, auth_headers: dict):
        create(client, auth_headers)

        assert client.get("/api/jobs/suggest-jobs").json() == []
        assert client.get("/api/jobs/suggest-jobs", params={"q": ""}).json() == []
        assert client.get("/api/jobs/suggest-locations").json() == []

    def test_suggest_jobs_capped_at_ten(self, client: TestClient, auth_headers: dict):
        for i in range(12):
            create(client, auth_headers, title=f"Engineer {i}")

        suggestions = client.get("/api/jobs/suggest-jobs", params={"q": "engineer"}).json()

        assert len(suggestions) == 10
        assert len(set(suggestions)) == 10

    def test_suggest_locations(self, client: TestClient, auth_headers: dict):
        create(client, auth_headers, location="Berlin")
        create(client, auth_headers, location="Berlin")
        create(client, auth_headers, location="Bern")

        response = client.get("/api/jobs/suggest-locations", params={"q": "BER"})

        assert response.json() == ["Berlin", "Bern"]


class TestDelete:

    def test_requires_auth(self, client: TestClient):
        assert client.delete(f"/api/jobs/{ObjectId()}").status_code == 401

    def test_deletes(self, client: TestClient, auth_headers: dict):
        created = create(client, auth_headers)

        response = client.delete(f"/api/jobs/{created['_id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Deleted"}
        assert client.get(f"/api/jobs/{created['_id']}").status_code == 404

    def test_delete_missing_is_404(self, client: TestClient, auth_headers: dict):
        response = client.delete(f"/api/jobs/{ObjectId()}", headers=auth_headers)
        assert response.status_code == 404
