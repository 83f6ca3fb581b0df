"""Delete project use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from cluster.application.usecase.base import load_actor
from cluster.domain.service import ProjectService, UserService
from cluster.domain.value import ProjectId


class DeleteProjectRequest(BaseModel):
    """Delete project request."""

    user_id: str
    project_id: str


class DeleteProjectResponse(BaseModel):
    """Delete project response."""

    project_id: str
    deleted: bool


class DeleteProjectUseCase:
    """Use case for deleting a project with all its children."""

    def __init__(
        self, project_service: ProjectService, user_service: UserService
    ) -> None:
        self.project_service = project_service
        self.user_service = user_service

    async def execute(self, request: DeleteProjectRequest) -> DeleteProjectResponse:
        """Delete the project.

        Raises:
            NotFoundError: If the project does not exist
            ForbiddenError: If the caller does not own it
        """
        with logfire.span("delete_project.execute", project_id=request.project_id):
            user = await load_actor(self.user_service, request.user_id)
            await self.project_service.delete(ProjectId(UUID(request.project_id)), user)
            return DeleteProjectResponse(project_id=request.project_id, deleted=True)
