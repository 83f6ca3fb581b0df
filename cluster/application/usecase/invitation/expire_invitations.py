"""Expire overdue invitations use case (scheduled)."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from cluster.domain.service import InvitationService


class ExpireInvitationsRequest(BaseModel):
    """Sweep request; ``now`` defaults to the clock."""

    now: datetime | None = None


class ExpireInvitationsResponse(BaseModel):
    """Sweep result."""

    expired: int


class ExpireInvitationsUseCase:
    """Use case run by the scheduler to expire overdue invitations."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(
        self, request: ExpireInvitationsRequest
    ) -> ExpireInvitationsResponse:
        with logfire.span("expire_invitations.execute"):
            count = await self.invitation_service.sweep_expired(request.now)
            return ExpireInvitationsResponse(expired=count)
