"""Remove investor use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from cluster.application.usecase.base import load_actor
from cluster.application.usecase.project.create_project import ProjectItem
from cluster.domain.service import ProjectService, UserService
from cluster.domain.value import AccessLevel, ProjectId, UserId


class RemoveInvestorRequest(BaseModel):
    """Remove investor request."""

    user_id: str
    project_id: str
    investor_id: str


class RemoveInvestorResponse(BaseModel):
    """Remove investor response."""

    project: ProjectItem


class RemoveInvestorUseCase:
    """Use case for revoking an investor's membership."""

    def __init__(
        self, project_service: ProjectService, user_service: UserService
    ) -> None:
        self.project_service = project_service
        self.user_service = user_service

    async def execute(self, request: RemoveInvestorRequest) -> RemoveInvestorResponse:
        """Remove the investor.

        Raises:
            NotFoundError: If the project is missing or the user is not an
                investor on it
            ForbiddenError: If the caller does not own the project
        """
        with logfire.span(
            "remove_investor.execute",
            project_id=request.project_id,
            investor_id=request.investor_id,
        ):
            user = await load_actor(self.user_service, request.user_id)
            project = await self.project_service.remove_investor(
                ProjectId(UUID(request.project_id)),
                UserId(UUID(request.investor_id)),
                user,
            )
            return RemoveInvestorResponse(
                project=ProjectItem.from_domain(project, AccessLevel.OWNER)
            )
