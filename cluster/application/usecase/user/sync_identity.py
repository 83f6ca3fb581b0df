"""Identity-provider webhook sync use case."""

from typing import Literal

import logfire
from pydantic import BaseModel

from cluster.adapter.identity.webhook import IdentityWebhookVerifier, parse_profile
from cluster.domain.service import UserService


class SyncIdentityRequest(BaseModel):
    """Raw webhook delivery."""

    body: bytes
    headers: dict[str, str]


class SyncIdentityResponse(BaseModel):
    """Outcome of processing a webhook delivery."""

    event_type: str
    action: Literal["created", "updated", "deleted", "ignored"]
    user_id: str | None = None


class SyncIdentityUseCase:
    """Use case mirroring identity-provider user events into the directory.

    ``user.created`` and ``user.updated`` upsert by external ID (either may
    arrive first); ``user.deleted`` removes the user and their projects.
    Other event types are acknowledged and ignored.
    """

    def __init__(
        self, verifier: IdentityWebhookVerifier, user_service: UserService
    ) -> None:
        """Initialize sync use case.

        Args:
            verifier: Webhook signature verifier
            user_service: User domain service
        """
        self.verifier = verifier
        self.user_service = user_service

    async def execute(self, request: SyncIdentityRequest) -> SyncIdentityResponse:
        """Verify and apply one delivery.

        Raises:
            WebhookVerificationError: If the delivery is not authentic or
                carries no user ID
        """
        event = self.verifier.verify(request.body, request.headers)

        with logfire.span("sync_identity.execute", event_type=event.type):
            if event.type in ("user.created", "user.updated"):
                profile = parse_profile(event.data)
                existing = await self.user_service.get_by_external_id(
                    profile.external_id
                )
                user = await self.user_service.upsert_from_identity(
                    external_id=profile.external_id,
                    email=profile.email,
                    display_name=profile.display_name,
                    role=profile.role,
                )
                return SyncIdentityResponse(
                    event_type=event.type,
                    action="updated" if existing else "created",
                    user_id=str(user.id),
                )

            if event.type == "user.deleted":
                profile = parse_profile(event.data)
                deleted = await self.user_service.delete_by_external_id(
                    profile.external_id
                )
                return SyncIdentityResponse(
                    event_type=event.type,
                    action="deleted" if deleted else "ignored",
                )

            logfire.info("Unhandled identity event", event_type=event.type)
            return SyncIdentityResponse(event_type=event.type, action="ignored")
