"""Create stage use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from cluster.application.usecase.base import load_actor
from cluster.application.usecase.task.add_tasks import TaskItem
from cluster.domain.model import Stage, Task
from cluster.domain.service import StageService, UserService
from cluster.domain.value import ProjectId


class StageItem(BaseModel):
    """Stage in API responses, with its tasks."""

    stage_id: str
    project_id: str
    name: str
    description: str | None
    is_done: bool
    tasks: list[TaskItem]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, stage: Stage, tasks: list[Task] | None = None) -> "StageItem":
        """Convert domain Stage (and its tasks) to response model."""
        return cls(
            stage_id=str(stage.id),
            project_id=str(stage.project_id),
            name=stage.name,
            description=stage.description,
            is_done=stage.is_done,
            tasks=[TaskItem.from_domain(t) for t in tasks or []],
            created_at=stage.created_at,
            updated_at=stage.updated_at,
        )


class CreateStageRequest(BaseModel):
    """Create stage request."""

    user_id: str
    project_id: str
    name: str
    description: str | None = None


class CreateStageResponse(BaseModel):
    """Create stage response."""

    stage: StageItem


class CreateStageUseCase:
    """Use case for adding a stage to a project."""

    def __init__(self, stage_service: StageService, user_service: UserService) -> None:
        self.stage_service = stage_service
        self.user_service = user_service

    async def execute(self, request: CreateStageRequest) -> CreateStageResponse:
        """Create the stage.

        Raises:
            ForbiddenError: If the caller does not own the project
        """
        with logfire.span("create_stage.execute", project_id=request.project_id):
            user = await load_actor(self.user_service, request.user_id)
            stage = await self.stage_service.create(
                ProjectId(UUID(request.project_id)),
                user,
                name=request.name,
                description=request.description,
            )
            return CreateStageResponse(stage=StageItem.from_domain(stage))
