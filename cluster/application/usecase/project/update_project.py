"""Update project use cases."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel

from cluster.application.usecase.base import load_actor
from cluster.application.usecase.project.create_project import ProjectItem
from cluster.domain.service import ProjectService, UserService
from cluster.domain.value import AccessLevel, ProjectId, ProjectStatus


class UpdateProjectRequest(BaseModel):
    """Update project request.

    Only fields present in ``model_fields_set`` are applied, so an explicit
    null clears description or a date.
    """

    user_id: str
    project_id: str
    name: str | None = None
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None


class UpdateProjectResponse(BaseModel):
    """Update project response."""

    project: ProjectItem


class UpdateProjectUseCase:
    """Use case for editing project details."""

    def __init__(
        self, project_service: ProjectService, user_service: UserService
    ) -> None:
        self.project_service = project_service
        self.user_service = user_service

    async def execute(self, request: UpdateProjectRequest) -> UpdateProjectResponse:
        """Apply the provided fields.

        Raises:
            ForbiddenError: If the caller does not own the project
        """
        user = await load_actor(self.user_service, request.user_id)
        optional = {
            field: getattr(request, field)
            for field in ("description", "start_date", "end_date")
            if field in request.model_fields_set
        }
        project = await self.project_service.update(
            ProjectId(UUID(request.project_id)),
            user,
            name=request.name,
            **optional,
        )
        return UpdateProjectResponse(
            project=ProjectItem.from_domain(project, AccessLevel.OWNER)
        )


class ChangeProjectStatusRequest(BaseModel):
    """Change project status request."""

    user_id: str
    project_id: str
    status: ProjectStatus


class ChangeProjectStatusUseCase:
    """Use case for moving a project through its lifecycle."""

    def __init__(
        self, project_service: ProjectService, user_service: UserService
    ) -> None:
        self.project_service = project_service
        self.user_service = user_service

    async def execute(
        self, request: ChangeProjectStatusRequest
    ) -> UpdateProjectResponse:
        """Change the status.

        Raises:
            ForbiddenError: If the caller does not own the project
        """
        user = await load_actor(self.user_service, request.user_id)
        project = await self.project_service.change_status(
            ProjectId(UUID(request.project_id)), user, request.status
        )
        return UpdateProjectResponse(
            project=ProjectItem.from_domain(project, AccessLevel.OWNER)
        )
