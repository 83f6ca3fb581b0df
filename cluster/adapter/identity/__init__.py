"""Identity-provider adapters."""

from cluster.adapter.identity.webhook import (
    IdentityEvent,
    IdentityProfile,
    IdentityWebhookVerifier,
    parse_profile,
)

__all__ = [
    "IdentityEvent",
    "IdentityProfile",
    "IdentityWebhookVerifier",
    "parse_profile",
]
