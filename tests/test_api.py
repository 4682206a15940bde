"""
HTTP Surface Tests

End-to-end moderation flow through the API plus health endpoints.
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.config import API_VERSION

SUBMISSION = {
    "title": "My Cool Project!!",
    "oneLiner": "Built in a weekend",
    "locale": "en",
    "tagSlugs": ["ai-tools", "new-tag"],
    "toolSlugs": ["claude"],
    "stackText": "FastAPI, PostgreSQL",
    "links": {"demo": "https://demo.example.com"},
    "email": "builder@example.com",
}


class TestHealth:

    def test_health(self, client):
        assert client.get("/api/health").json() == {"status": "ok"}

    def test_deployment(self, client):
        body = client.get("/api/v1/health/deployment").json()
        assert body["components"]["store"] == {"status": "healthy", "backend": "memory"}
        assert body["overall_status"] == "healthy"
        assert body["api_version"] == API_VERSION


class TestModerationFlow:

    def test_submit_approve_publish(self, client, admin_client):
        created = client.post("/api/v1/submissions", json=SUBMISSION)
        assert created.status_code == 201
        submission_id = created.json()["submissionId"]

        pending = admin_client.get("/api/v1/submissions/pending").json()
        assert [s["id"] for s in pending["submissions"]] == [submission_id]
        assert pending["submissions"][0]["links"]["demo"] == "https://demo.example.com"

        approved = admin_client.post(f"/api/v1/submissions/{submission_id}/approve")
        assert approved.status_code == 200
        assert approved.json()["workflowStatus"] == "approved"

        case = client.get("/api/v1/cases/en/my-cool-project").json()
        assert case["stack"] == ["FastAPI", "PostgreSQL"]
        assert [t["name"] for t in case["tags"]] == ["Ai Tools", "New Tag"]
        assert [t["slug"] for t in case["tools"]] == ["claude"]

        assert admin_client.get("/api/v1/submissions/pending").json()["total"] == 0

    def test_double_approve_409(self, client, admin_client):
        submission_id = client.post("/api/v1/submissions", json=SUBMISSION).json()["submissionId"]
        admin_client.post(f"/api/v1/submissions/{submission_id}/approve")
        again = admin_client.post(f"/api/v1/submissions/{submission_id}/approve")
        assert again.status_code == 409
        assert client.get("/api/v1/cases", params={"locale": "en"}).json()["total"] == 1

    def test_reject(self, client, admin_client):
        submission_id = client.post("/api/v1/submissions", json=SUBMISSION).json()["submissionId"]
        response = admin_client.post(f"/api/v1/submissions/{submission_id}/reject")
        assert response.json()["workflowStatus"] == "rejected"
        assert admin_client.post(f"/api/v1/submissions/{submission_id}/approve").status_code == 409
        assert client.get("/api/v1/tags").json()["total"] == 0

    def test_unknown_submission_404(self, admin_client):
        assert admin_client.post("/api/v1/submissions/missing/approve").status_code == 404

    def test_moderation_requires_admin(self, client):
        submission_id = client.post("/api/v1/submissions", json=SUBMISSION).json()["submissionId"]
        assert client.post(f"/api/v1/submissions/{submission_id}/approve").status_code == 401

    def test_invalid_submission_422(self, client):
        response = client.post("/api/v1/submissions", json={**SUBMISSION, "locale": "fr"})
        assert response.status_code == 422
