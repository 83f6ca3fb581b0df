"""End-to-end tests for projects, stages, tasks and comments."""

from datetime import timedelta

import pytest

from tests.e2e.api import make_client, sign_up
from tests.identity import session_token


@pytest.fixture
def client():
    """Create test client with test container."""
    return make_client()


@pytest.fixture
def owner_headers(client):
    _, headers = sign_up(client, "user_owner", "owner@example.com", first_name="Olga")
    return headers


class TestHealth:
    def test_health(self, client):
        """Health check is public."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestProjects:
    """End-to-end tests for project endpoints."""

    def test_create_and_list(self, client, owner_headers):
        """Created projects show up on the owner's dashboard."""
        # Act
        created = client.post(
            "/projects",
            json={"name": "Wind Park", "description": "Offshore"},
            headers=owner_headers,
        )
        listing = client.get("/projects", headers=owner_headers)

        # Assert
        assert created.status_code == 201
        assert created.json()["project"]["status"] == "planning"
        assert listing.json()["total"] == 1
        assert listing.json()["projects"][0]["name"] == "Wind Park"

    def test_short_name_rejected(self, client, owner_headers):
        """Names under 3 characters are rejected with a code."""
        # Act
        response = client.post("/projects", json={"name": "ab"}, headers=owner_headers)

        # Assert
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PROJECT_NAME"

    def test_list_requires_auth(self, client):
        """Anonymous callers get 401."""
        assert client.get("/projects").status_code == 401

    def test_invalid_token_rejected(self, client):
        """A garbage bearer token is 401."""
        response = client.get(
            "/projects", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401

    def test_session_cookie_authenticates(self, client, owner_headers):
        """The provider's __session cookie works in place of a bearer header."""
        # Arrange
        client.cookies.set("__session", session_token("user_owner"))

        # Act
        response = client.get("/projects")

        # Assert
        assert response.status_code == 200

    def test_expired_session_rejected(self, client, owner_headers):
        """Expired provider sessions are 401."""
        # Arrange
        token = session_token("user_owner", expires_in=timedelta(minutes=-5))

        # Act
        response = client.get(
            "/projects", headers={"Authorization": f"Bearer {token}"}
        )

        # Assert
        assert response.status_code == 401

    def test_malformed_project_id(self, client, owner_headers):
        """Non-UUID path IDs are a validation error."""
        response = client.get("/projects/not-a-uuid", headers=owner_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_update_status_and_delete(self, client, owner_headers):
        """Owners can edit, change status and delete."""
        # Arrange
        project_id = client.post(
            "/projects", json={"name": "Wind Park"}, headers=owner_headers
        ).json()["project"]["project_id"]

        # Act
        renamed = client.patch(
            f"/projects/{project_id}", json={"name": "Sun Park"}, headers=owner_headers
        )
        activated = client.patch(
            f"/projects/{project_id}/status",
            json={"status": "active"},
            headers=owner_headers,
        )
        deleted = client.delete(f"/projects/{project_id}", headers=owner_headers)
        missing = client.get(f"/projects/{project_id}", headers=owner_headers)

        # Assert
        assert renamed.json()["project"]["name"] == "Sun Park"
        assert activated.json()["project"]["status"] == "active"
        assert deleted.json()["deleted"] is True
        assert missing.status_code == 404
        assert missing.json()["code"] == "PROJECT_NOT_FOUND"


class TestStagesTasksComments:
    """End-to-end tests for the project work breakdown."""

    def test_stage_task_comment_flow(self, client, owner_headers):
        """Owner builds stages and tasks and comments on them."""
        # Arrange
        project_id = client.post(
            "/projects", json={"name": "Wind Park"}, headers=owner_headers
        ).json()["project"]["project_id"]

        # Act
        stage = client.post(
            f"/projects/{project_id}/stages",
            json={"name": "Design", "description": "Phase one"},
            headers=owner_headers,
        )
        stage_id = stage.json()["stage"]["stage_id"]
        added = client.post(
            f"/tasks/{stage_id}/add",
            json={"tasks": "Survey, Permit"},
            headers=owner_headers,
        )
        task_id = added.json()["tasks"][0]["task_id"]
        done = client.patch(
            f"/tasks/{task_id}", json={"is_done": True}, headers=owner_headers
        )
        comment = client.post(
            f"/comments/{task_id}", json={"text": "Survey booked"}, headers=owner_headers
        )
        stages = client.get(f"/projects/{project_id}/stages", headers=owner_headers)

        # Assert
        assert stage.status_code == 201
        assert added.status_code == 201
        assert [t["task_name"] for t in added.json()["tasks"]] == ["Survey", "Permit"]
        assert done.json()["task"]["is_done"] is True
        assert comment.status_code == 201
        assert comment.json()["comment"]["author_name"] == "Olga"
        assert [t["task_name"] for t in stages.json()["stages"][0]["tasks"]] == [
            "Survey",
            "Permit",
        ]

    def test_bad_tasks_payload(self, client, owner_headers):
        """Unsupported task payloads are rejected with a code."""
        # Arrange
        project_id = client.post(
            "/projects", json={"name": "Wind Park"}, headers=owner_headers
        ).json()["project"]["project_id"]
        stage_id = client.post(
            f"/projects/{project_id}/stages",
            json={"name": "Design"},
            headers=owner_headers,
        ).json()["stage"]["stage_id"]

        # Act
        response = client.post(
            f"/tasks/{stage_id}/add", json={"tasks": 42}, headers=owner_headers
        )

        # Assert
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_TASKS_FORMAT"
