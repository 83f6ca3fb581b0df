"""Identity-provider webhook verification and parsing.

Deliveries are signed with Svix (``svix-id``, ``svix-timestamp`` and
``svix-signature`` headers); verification is delegated to the ``svix``
package.
"""

import json
from dataclasses import dataclass
from typing import Any, Mapping

import logfire
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from svix.webhooks import Webhook
from svix.webhooks import WebhookVerificationError as SvixVerificationError

from cluster.adapter.error import WebhookVerificationError
from cluster.domain.value import UserRole

SIGNATURE_HEADERS = ("svix-id", "svix-timestamp", "svix-signature")


class IdentityEvent(BaseModel):
    """Verified webhook event."""

    type: str
    data: dict[str, Any] = Field(default_factory=dict)


@dataclass
class IdentityProfile:
    """User fields extracted from a ``user.*`` event payload."""

    external_id: str
    email: str | None
    display_name: str | None
    role: UserRole | None


class IdentityWebhookVerifier:
    """Verifies signed identity-provider webhook deliveries."""

    def __init__(self, secret: str | None) -> None:
        """Initialize verifier.

        Args:
            secret: Signing secret (``whsec_...``); None disables the endpoint
        """
        self.secret = secret

    def verify(self, body: bytes, headers: Mapping[str, str]) -> IdentityEvent:
        """Check signature and freshness, then parse the event.

        Raises:
            WebhookVerificationError: If the secret is missing, headers are
                absent, the timestamp is stale or no signature matches
        """
        if not self.secret:
            raise WebhookVerificationError(
                "Webhook secret is not configured", code="WEBHOOK_SECRET_NOT_SET"
            )

        headers = {key.lower(): value for key, value in headers.items()}
        if not all(headers.get(name) for name in SIGNATURE_HEADERS):
            raise WebhookVerificationError(
                "Missing webhook signature headers", code="MISSING_WEBHOOK_HEADERS"
            )

        try:
            webhook = Webhook(self.secret)
        except ValueError:
            raise WebhookVerificationError(
                "Webhook secret is malformed", code="WEBHOOK_SECRET_NOT_SET"
            )

        msg_id = headers["svix-id"]
        try:
            payload = webhook.verify(body, headers)
        except SvixVerificationError as e:
            logfire.warn("Webhook verification failed", msg_id=msg_id, reason=str(e))
            raise WebhookVerificationError(str(e))
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise WebhookVerificationError(
                "Webhook body is not a valid event", code="INVALID_WEBHOOK_PAYLOAD"
            )
        except ValueError:
            # Undecodable signature list
            logfire.warn("Malformed webhook signature", msg_id=msg_id)
            raise WebhookVerificationError("Webhook signature is malformed")

        try:
            return IdentityEvent.model_validate(payload)
        except PydanticValidationError:
            raise WebhookVerificationError(
                "Webhook body is not a valid event", code="INVALID_WEBHOOK_PAYLOAD"
            )


def parse_profile(data: Mapping[str, Any]) -> IdentityProfile:
    """Extract the user profile from a ``user.*`` event payload.

    Email is the primary address (falling back to the first one). The role
    comes from ``public_metadata.role``, then ``unsafe_metadata.role``.

    Raises:
        WebhookVerificationError: If the payload has no usable user ID
    """
    external_id = data.get("id")
    if not isinstance(external_id, str) or not external_id.strip():
        raise WebhookVerificationError("Invalid user ID", code="INVALID_USER_ID")

    addresses = data.get("email_addresses") or []
    primary_id = data.get("primary_email_address_id")
    email = next(
        (a.get("email_address") for a in addresses if a.get("id") == primary_id),
        None,
    )
    if email is None and addresses:
        email = addresses[0].get("email_address")

    names = [data.get("first_name"), data.get("last_name")]
    display_name = " ".join(n for n in names if n) or data.get("username") or None

    public = data.get("public_metadata") or {}
    unsafe = data.get("unsafe_metadata") or {}
    role = UserRole.from_provider(public.get("role") or unsafe.get("role"))

    return IdentityProfile(
        external_id=external_id,
        email=email,
        display_name=display_name,
        role=role,
    )
