"""End-to-end tests for identity webhooks and the user directory."""

import json

import pytest

from tests.e2e.api import make_client, post_identity_event, sign_up, webhook_headers


@pytest.fixture
def client():
    """Create test client with test container."""
    return make_client()


class TestIdentityWebhook:
    """End-to-end tests for /webhooks/identity."""

    def test_created_user_can_read_own_profile(self, client):
        """A synced user authenticates and sees their profile."""
        # Arrange
        user_id, headers = sign_up(
            client, "user_ada", "ada@example.com", role="cluster_god", first_name="Ada"
        )

        # Act
        response = client.get("/users/me", headers=headers)

        # Assert
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["user_id"] == user_id
        assert user["role"] == "super_admin"
        assert user["email"] == "ada@example.com"

    def test_forged_signature_rejected(self, client):
        """Unsigned deliveries are rejected."""
        # Arrange
        body = json.dumps({"type": "user.created", "data": {"id": "user_x"}}).encode()
        headers = webhook_headers(body)
        headers["svix-signature"] = "v1,Zm9yZ2Vk"

        # Act
        response = client.post("/webhooks/identity", content=body, headers=headers)

        # Assert
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_WEBHOOK_SIGNATURE"

    def test_deleted_user_loses_access(self, client):
        """After user.deleted the old token no longer resolves a user."""
        # Arrange
        _, headers = sign_up(client, "user_ada", "ada@example.com")

        # Act
        deleted = post_identity_event(client, "user.deleted", {"id": "user_ada"})
        response = client.get("/users/me", headers=headers)

        # Assert
        assert deleted.json()["action"] == "deleted"
        assert response.status_code == 401
        assert response.json()["code"] == "AUTH_ERROR_USER_NOT_FOUND"

    def test_other_events_acknowledged(self, client):
        """Unrelated events return 200 and are ignored."""
        response = post_identity_event(client, "session.created", {"id": "sess_1"})

        assert response.status_code == 200
        assert response.json()["action"] == "ignored"
