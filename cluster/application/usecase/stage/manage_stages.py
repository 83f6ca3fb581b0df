"""List, update and delete stage use cases."""

from uuid import UUID

from pydantic import BaseModel

from cluster.application.usecase.base import load_actor
from cluster.application.usecase.stage.create_stage import StageItem
from cluster.domain.service import StageService, UserService
from cluster.domain.value import ProjectId, StageId


class ListStagesRequest(BaseModel):
    """List stages request."""

    user_id: str
    project_id: str


class ListStagesResponse(BaseModel):
    """List stages response."""

    stages: list[StageItem]


class ListStagesUseCase:
    """Use case for listing a project's stages with their tasks."""

    def __init__(self, stage_service: StageService, user_service: UserService) -> None:
        self.stage_service = stage_service
        self.user_service = user_service

    async def execute(self, request: ListStagesRequest) -> ListStagesResponse:
        user = await load_actor(self.user_service, request.user_id)
        stages = await self.stage_service.list_for_project(
            ProjectId(UUID(request.project_id)), user
        )
        return ListStagesResponse(
            stages=[StageItem.from_domain(s.stage, s.tasks) for s in stages]
        )


class UpdateStageRequest(BaseModel):
    """Update stage request."""

    user_id: str
    stage_id: str
    name: str | None = None
    description: str | None = None
    is_done: bool | None = None


class UpdateStageResponse(BaseModel):
    """Update stage response."""

    stage: StageItem


class UpdateStageUseCase:
    """Use case for editing a stage."""

    def __init__(self, stage_service: StageService, user_service: UserService) -> None:
        self.stage_service = stage_service
        self.user_service = user_service

    async def execute(self, request: UpdateStageRequest) -> UpdateStageResponse:
        user = await load_actor(self.user_service, request.user_id)
        stage = await self.stage_service.update(
            StageId(UUID(request.stage_id)),
            user,
            name=request.name,
            description=request.description,
            is_done=request.is_done,
        )
        return UpdateStageResponse(stage=StageItem.from_domain(stage))


class DeleteStageRequest(BaseModel):
    """Delete stage request."""

    user_id: str
    stage_id: str


class DeleteStageResponse(BaseModel):
    """Delete stage response."""

    stage_id: str
    deleted: bool


class DeleteStageUseCase:
    """Use case for deleting a stage with its tasks and comments."""

    def __init__(self, stage_service: StageService, user_service: UserService) -> None:
        self.stage_service = stage_service
        self.user_service = user_service

    async def execute(self, request: DeleteStageRequest) -> DeleteStageResponse:
        user = await load_actor(self.user_service, request.user_id)
        await self.stage_service.delete(StageId(UUID(request.stage_id)), user)
        return DeleteStageResponse(stage_id=request.stage_id, deleted=True)
