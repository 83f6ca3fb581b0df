"""Get project use case."""

from uuid import UUID

from pydantic import BaseModel

from cluster.application.usecase.base import load_actor
from cluster.application.usecase.project.create_project import ProjectItem
from cluster.application.usecase.stage.create_stage import StageItem
from cluster.domain.service import ProjectService, StageService, UserService
from cluster.domain.value import ProjectId


class GetProjectRequest(BaseModel):
    """Get project request."""

    user_id: str
    project_id: str


class GetProjectResponse(BaseModel):
    """Project detail with its stages and tasks."""

    project: ProjectItem
    stages: list[StageItem]


class GetProjectUseCase:
    """Use case for the project detail page."""

    def __init__(
        self,
        project_service: ProjectService,
        stage_service: StageService,
        user_service: UserService,
    ) -> None:
        self.project_service = project_service
        self.stage_service = stage_service
        self.user_service = user_service

    async def execute(self, request: GetProjectRequest) -> GetProjectResponse:
        """Load a project the caller can access.

        Raises:
            NotFoundError: If the project does not exist
            ForbiddenError: If the caller has no access
        """
        user = await load_actor(self.user_service, request.user_id)
        project, level = await self.project_service.get_for_user(
            ProjectId(UUID(request.project_id)), user
        )
        stages = await self.stage_service.stages_with_tasks(project.id)
        return GetProjectResponse(
            project=ProjectItem.from_domain(project, level),
            stages=[StageItem.from_domain(s.stage, s.tasks) for s in stages],
        )
