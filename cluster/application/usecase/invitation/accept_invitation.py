"""Accept invitation use case."""

import logfire
from pydantic import BaseModel

from cluster.application.usecase.base import BaseUseCase, load_actor
from cluster.application.usecase.project.create_project import ProjectItem
from cluster.domain.service import InvitationService, UserService, access_level


class AcceptInvitationRequest(BaseModel):
    """Accept invitation request."""

    user_id: str  # Accepting user, from auth
    token: str


class AcceptInvitationResponse(BaseModel):
    """Accept invitation response."""

    project: ProjectItem
    already_investor: bool


class AcceptInvitationUseCase(BaseUseCase):
    """Use case for turning an invitation into investor membership."""

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
        self, request: AcceptInvitationRequest
    ) -> AcceptInvitationResponse:
        """Accept the invitation as the authenticated user.

        Raises:
            UnauthenticatedError: If the caller is unknown
            DomainError: Whatever ``InvitationService.accept`` raises
        """
        with logfire.span(
            "accept_invitation.execute",
            user_id=request.user_id,
            token=request.token[:8] + "...",
        ):
            user = await load_actor(self.user_service, request.user_id)
            result = await self.invitation_service.accept(request.token, user)
            return AcceptInvitationResponse(
                project=ProjectItem.from_domain(
                    result.project, access_level(user, result.project)
                ),
                already_investor=result.already_investor,
            )
