"""Signing helpers standing in for the identity provider."""

from datetime import datetime, timedelta, timezone

import jwt
from cryptography.hazmat.primitives.asymmetric import rsa
from svix.webhooks import Webhook

from tests.conftest import TEST_ISSUER, TEST_WEBHOOK_SECRET

# Key pair the test identity provider signs sessions with
SESSION_KEY = rsa.generate_private_key(public_exponent=65537, key_size=2048)


def session_token(
    external_id: str,
    expires_in: timedelta = timedelta(hours=1),
    key=SESSION_KEY,
    **claims,
) -> str:
    """RS256 session token for a provider user."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": external_id,
        "iss": TEST_ISSUER,
        "iat": now,
        "exp": now + expires_in,
        "sid": "sess_test",
        **claims,
    }
    return jwt.encode(payload, key, algorithm="RS256", headers={"kid": "test"})


def signed_headers(
    body: bytes,
    msg_id: str = "msg_test",
    sent_at: datetime | None = None,
) -> dict[str, str]:
    """Svix headers for a delivery signed with the test secret."""
    sent_at = sent_at or datetime.now(timezone.utc)
    signature = Webhook(TEST_WEBHOOK_SECRET).sign(msg_id, sent_at, body.decode())
    return {
        "svix-id": msg_id,
        "svix-timestamp": str(int(sent_at.timestamp())),
        "svix-signature": signature,
    }
