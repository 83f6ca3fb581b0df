"""Cancel invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from cluster.application.usecase.base import load_actor
from cluster.domain.service import InvitationService, UserService
from cluster.domain.value import InvitationId, InvitationStatus


class CancelInvitationRequest(BaseModel):
    """Cancel invitation request."""

    user_id: str
    invitation_id: str


class CancelInvitationResponse(BaseModel):
    """Cancel invitation response."""

    invitation_id: str
    status: InvitationStatus


class CancelInvitationUseCase:
    """Use case for withdrawing a pending invitation."""

    def __init__(
        self, invitation_service: InvitationService, user_service: UserService
    ) -> None:
        self.invitation_service = invitation_service
        self.user_service = user_service

    async def execute(
        self, request: CancelInvitationRequest
    ) -> CancelInvitationResponse:
        """Cancel the invitation.

        Raises:
            ForbiddenError: If the caller does not own the project
            StateInvalidError: If the invitation is no longer pending
        """
        user = await load_actor(self.user_service, request.user_id)
        invitation = await self.invitation_service.cancel(
            InvitationId(UUID(request.invitation_id)), user
        )
        return CancelInvitationResponse(
            invitation_id=str(invitation.id), status=invitation.status
        )
