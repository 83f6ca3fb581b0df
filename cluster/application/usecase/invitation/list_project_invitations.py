"""List project invitations use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from cluster.application.usecase.base import load_actor
from cluster.domain.service import InvitationService, UserService
from cluster.domain.value import InvitationStatus, ProjectId


class InvitationListItem(BaseModel):
    """Invitation in an owner's listing (no token)."""

    invitation_id: str
    invitee_email: str
    recipient_name: str | None  # Set when the invitee already has an account
    inviter_id: str
    inviter_name: str | None
    status: InvitationStatus
    message: str | None
    expires_at: datetime
    accepted_at: datetime | None
    email_send_failed: bool
    created_at: datetime


class ListProjectInvitationsRequest(BaseModel):
    """List project invitations request."""

    user_id: str
    project_id: str


class ListProjectInvitationsResponse(BaseModel):
    """List project invitations response."""

    invitations: list[InvitationListItem]
    total: int


class ListProjectInvitationsUseCase:
    """Use case for the owner's view of a project's invitations."""

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

    async def execute(
        self, request: ListProjectInvitationsRequest
    ) -> ListProjectInvitationsResponse:
        """List invitations with inviter and recipient names resolved.

        Raises:
            ForbiddenError: If the caller does not own the project
        """
        user = await load_actor(self.user_service, request.user_id)
        invitations = await self.invitation_service.list_for_project(
            ProjectId(UUID(request.project_id)), user
        )

        inviter_names = await self.user_service.get_names(
            [i.inviter_id for i in invitations]
        )
        recipient_names: dict[str, str | None] = {}
        for invitation in invitations:
            email = invitation.invitee_email
            if email.root not in recipient_names:
                recipient = await self.user_service.get_by_email(email)
                recipient_names[email.root] = recipient.name if recipient else None

        items = [
            InvitationListItem(
                invitation_id=str(i.id),
                invitee_email=i.invitee_email.root,
                recipient_name=recipient_names[i.invitee_email.root],
                inviter_id=str(i.inviter_id),
                inviter_name=inviter_names.get(i.inviter_id),
                status=i.status,
                message=i.message,
                expires_at=i.expires_at,
                accepted_at=i.accepted_at,
                email_send_failed=i.email_send_failed,
                created_at=i.created_at,
            )
            for i in invitations
        ]
        return ListProjectInvitationsResponse(invitations=items, total=len(items))
