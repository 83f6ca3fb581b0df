"""Unit tests for identity webhook verification and payload parsing."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from cluster.adapter.error import WebhookVerificationError
from cluster.adapter.identity.webhook import IdentityWebhookVerifier, parse_profile
from cluster.domain.value import UserRole
from tests.conftest import TEST_WEBHOOK_SECRET
from tests.identity import signed_headers


class TestVerify:
    """Tests for IdentityWebhookVerifier.verify."""

    def test_valid_delivery_parses_event(self):
        """A correctly signed body yields the event."""
        # Arrange
        verifier = IdentityWebhookVerifier(TEST_WEBHOOK_SECRET)
        body = json.dumps({"type": "user.created", "data": {"id": "user_1"}}).encode()

        # Act
        event = verifier.verify(body, signed_headers(body))

        # Assert
        assert event.type == "user.created"
        assert event.data == {"id": "user_1"}

    def test_header_names_are_case_insensitive(self):
        """Proxies may change header casing."""
        # Arrange
        verifier = IdentityWebhookVerifier(TEST_WEBHOOK_SECRET)
        body = b'{"type": "user.updated", "data": {}}'
        headers = {k.title(): v for k, v in signed_headers(body).items()}

        # Act
        event = verifier.verify(body, headers)

        # Assert
        assert event.type == "user.updated"

    def test_any_matching_signature_is_enough(self):
        """Rotated secrets send several signatures; one match suffices."""
        # Arrange
        verifier = IdentityWebhookVerifier(TEST_WEBHOOK_SECRET)
        body = b'{"type": "user.updated", "data": {}}'
        headers = signed_headers(body)
        headers["svix-signature"] = "v1,Ym9ndXM= " + headers["svix-signature"]

        # Act
        event = verifier.verify(body, headers)

        # Assert
        assert event.type == "user.updated"

    def test_tampered_body_rejected(self):
        """Changing the body invalidates the signature."""
        # Arrange
        verifier = IdentityWebhookVerifier(TEST_WEBHOOK_SECRET)
        body = b'{"type": "user.created", "data": {"id": "user_1"}}'
        headers = signed_headers(body)

        # Act & Assert
        with pytest.raises(WebhookVerificationError) as exc:
            verifier.verify(body.replace(b"user_1", b"user_2"), headers)
        assert exc.value.code == "INVALID_WEBHOOK_SIGNATURE"

    def test_other_secret_rejected(self):
        """A delivery signed for another endpoint does not verify."""
        # Arrange
        verifier = IdentityWebhookVerifier("whsec_b3RoZXItZW5kcG9pbnQtc2VjcmV0")
        body = b'{"type": "user.created", "data": {}}'

        # Act & Assert
        with pytest.raises(WebhookVerificationError) as exc:
            verifier.verify(body, signed_headers(body))
        assert exc.value.code == "INVALID_WEBHOOK_SIGNATURE"

    @pytest.mark.parametrize("age", [timedelta(minutes=10), -timedelta(minutes=10)])
    def test_timestamp_outside_tolerance_rejected(self, age):
        """Deliveries too old or too far in the future are refused."""
        # Arrange
        verifier = IdentityWebhookVerifier(TEST_WEBHOOK_SECRET)
        body = b'{"type": "user.created", "data": {}}'
        sent_at = datetime.now(timezone.utc) - age

        # Act & Assert
        with pytest.raises(WebhookVerificationError) as exc:
            verifier.verify(body, signed_headers(body, sent_at=sent_at))
        assert exc.value.code == "INVALID_WEBHOOK_SIGNATURE"

    def test_missing_headers_rejected(self):
        """All three svix headers are required."""
        # Arrange
        verifier = IdentityWebhookVerifier(TEST_WEBHOOK_SECRET)
        body = b"{}"
        headers = signed_headers(body)
        del headers["svix-id"]

        # Act & Assert
        with pytest.raises(WebhookVerificationError) as exc:
            verifier.verify(body, headers)
        assert exc.value.code == "MISSING_WEBHOOK_HEADERS"

    def test_unconfigured_secret_rejected(self):
        """Without a secret the endpoint refuses everything."""
        # Arrange
        verifier = IdentityWebhookVerifier(None)

        # Act & Assert
        with pytest.raises(WebhookVerificationError) as exc:
            verifier.verify(b"{}", {})
        assert exc.value.code == "WEBHOOK_SECRET_NOT_SET"

    def test_signed_garbage_body_rejected(self):
        """Authentic but malformed bodies are still rejected."""
        # Arrange
        verifier = IdentityWebhookVerifier(TEST_WEBHOOK_SECRET)
        body = b"not json"

        # Act & Assert
        with pytest.raises(WebhookVerificationError) as exc:
            verifier.verify(body, signed_headers(body))
        assert exc.value.code == "INVALID_WEBHOOK_PAYLOAD"

    def test_signed_non_event_rejected(self):
        """A JSON body without an event type is rejected."""
        # Arrange
        verifier = IdentityWebhookVerifier(TEST_WEBHOOK_SECRET)
        body = b'["user.created"]'

        # Act & Assert
        with pytest.raises(WebhookVerificationError) as exc:
            verifier.verify(body, signed_headers(body))
        assert exc.value.code == "INVALID_WEBHOOK_PAYLOAD"


class TestParseProfile:
    """Tests for parse_profile."""

    def test_primary_email_and_role(self):
        """Primary email wins; role comes from public metadata."""
        # Arrange
        data = {
            "id": "user_1",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "primary_email_address_id": "e2",
            "email_addresses": [
                {"id": "e1", "email_address": "old@example.com"},
                {"id": "e2", "email_address": "Ada@Example.com"},
            ],
            "public_metadata": {"role": "cluster_god"},
        }

        # Act
        profile = parse_profile(data)

        # Assert
        assert profile.external_id == "user_1"
        assert profile.email == "Ada@Example.com"
        assert profile.display_name == "Ada Lovelace"
        assert profile.role == UserRole.SUPER_ADMIN

    def test_fallbacks(self):
        """First address, username and unsafe metadata are fallbacks."""
        # Arrange
        data = {
            "id": "user_2",
            "username": "ada",
            "email_addresses": [{"id": "e1", "email_address": "ada@example.com"}],
            "unsafe_metadata": {"role": "investor"},
        }

        # Act
        profile = parse_profile(data)

        # Assert
        assert profile.email == "ada@example.com"
        assert profile.display_name == "ada"
        assert profile.role == UserRole.INVESTOR

    def test_unknown_role_is_none(self):
        """Unknown roles leave the role unset."""
        assert parse_profile({"id": "user_3", "public_metadata": {"role": "x"}}).role is None

    @pytest.mark.parametrize("data", [{}, {"id": ""}, {"id": 42}])
    def test_missing_user_id_rejected(self, data):
        """A usable user ID is required."""
        with pytest.raises(WebhookVerificationError) as exc:
            parse_profile(data)
        assert exc.value.code == "INVALID_USER_ID"
