"""Send invitation use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from cluster.application.usecase.base import BaseUseCase, load_actor
from cluster.domain.model import Invitation
from cluster.domain.service import InvitationService, UserService
from cluster.domain.value import InvitationStatus, ProjectId


class InvitationItem(BaseModel):
    """Invitation as returned to its creator (includes the token)."""

    invitation_id: str
    project_id: str
    inviter_id: str
    invitee_email: str
    status: InvitationStatus
    token: str
    invite_url: str
    message: str | None
    expires_at: datetime
    email_send_failed: bool
    last_email_error: str | None
    created_at: datetime


class SendInvitationRequest(BaseModel):
    """Send invitation request."""

    inviter_id: str  # User ID from auth
    project_id: str
    invitee_email: str = Field(min_length=1, max_length=254)
    message: str | None = None


class SendInvitationResponse(BaseModel):
    """Send invitation response."""

    invitation: InvitationItem


class SendInvitationUseCase(BaseUseCase):
    """Use case for inviting an investor to a project by email."""

    def __init__(
        self, invitation_service: InvitationService, user_service: UserService
    ) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
            user_service: User domain service
        """
        self.invitation_service = invitation_service
        self.user_service = user_service

    async def execute(self, request: SendInvitationRequest) -> SendInvitationResponse:
        """Issue the invitation and attempt delivery.

        Raises:
            UnauthenticatedError: If the inviter is unknown
            DomainError: Whatever ``InvitationService.issue`` raises
        """
        with logfire.span("send_invitation.execute", project_id=request.project_id):
            inviter = await load_actor(self.user_service, request.inviter_id)
            invitation = await self.invitation_service.issue(
                project_id=ProjectId(UUID(request.project_id)),
                inviter=inviter,
                invitee_email=request.invitee_email,
                message=request.message,
            )
            return SendInvitationResponse(
                invitation=self._to_item(invitation),
            )

    def _to_item(self, invitation: Invitation) -> InvitationItem:
        return InvitationItem(
            invitation_id=str(invitation.id),
            project_id=str(invitation.project_id),
            inviter_id=str(invitation.inviter_id),
            invitee_email=invitation.invitee_email.root,
            status=invitation.status,
            token=invitation.token.root,
            invite_url=self.invitation_service.build_link(invitation.token),
            message=invitation.message,
            expires_at=invitation.expires_at,
            email_send_failed=invitation.email_send_failed,
            last_email_error=invitation.last_email_error,
            created_at=invitation.created_at,
        )
