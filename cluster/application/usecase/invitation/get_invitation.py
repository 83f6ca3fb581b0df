"""Get invitation by token use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from cluster.domain.service import InvitationService
from cluster.domain.value import InvitationStatus, ProjectStatus


class InvitationProjectSummary(BaseModel):
    """Project summary shown on the acceptance page."""

    project_id: str
    name: str
    description: str | None
    status: ProjectStatus


class GetInvitationRequest(BaseModel):
    """Get invitation request."""

    token: str


class GetInvitationResponse(BaseModel):
    """Get invitation response."""

    invitation_id: str
    invitee_email: str
    status: InvitationStatus
    message: str | None
    expires_at: datetime
    inviter_name: str | None
    project: InvitationProjectSummary


class GetInvitationUseCase:
    """Use case for rendering an invitation before sign-in.

    Public: anyone holding the token may see who invited them to what.
    """

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(self, request: GetInvitationRequest) -> GetInvitationResponse:
        """Resolve a live invitation.

        Raises:
            NotFoundError: Unknown token
            ConflictError: Already accepted
            StateInvalidError: Cancelled, expired or otherwise invalid
        """
        with logfire.span("get_invitation.execute", token=request.token[:8] + "..."):
            resolved = await self.invitation_service.resolve(request.token)
            invitation = resolved.invitation
            project = resolved.project

            return GetInvitationResponse(
                invitation_id=str(invitation.id),
                invitee_email=invitation.invitee_email.root,
                status=invitation.status,
                message=invitation.message,
                expires_at=invitation.expires_at,
                inviter_name=resolved.inviter.name if resolved.inviter else None,
                project=InvitationProjectSummary(
                    project_id=str(project.id),
                    name=project.name,
                    description=project.description,
                    status=project.status,
                ),
            )
