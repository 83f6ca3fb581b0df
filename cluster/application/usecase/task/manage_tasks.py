"""List, update and delete task use cases."""

from uuid import UUID

from pydantic import BaseModel

from cluster.application.usecase.base import load_actor
from cluster.application.usecase.task.add_tasks import TaskItem
from cluster.domain.service import TaskService, UserService
from cluster.domain.value import StageId, TaskId


class ListTasksRequest(BaseModel):
    """List tasks request."""

    user_id: str
    stage_id: str


class ListTasksResponse(BaseModel):
    """List tasks response."""

    tasks: list[TaskItem]


class ListTasksUseCase:
    """Use case for listing a stage's tasks."""

    def __init__(self, task_service: TaskService, user_service: UserService) -> None:
        self.task_service = task_service
        self.user_service = user_service

    async def execute(self, request: ListTasksRequest) -> ListTasksResponse:
        user = await load_actor(self.user_service, request.user_id)
        tasks = await self.task_service.list_for_stage(
            StageId(UUID(request.stage_id)), user
        )
        return ListTasksResponse(tasks=[TaskItem.from_domain(t) for t in tasks])


class UpdateTaskRequest(BaseModel):
    """Update task request."""

    user_id: str
    task_id: str
    task_name: str | None = None
    is_done: bool | None = None


class UpdateTaskResponse(BaseModel):
    """Update task response."""

    task: TaskItem


class UpdateTaskUseCase:
    """Use case for renaming a task or toggling it done."""

    def __init__(self, task_service: TaskService, user_service: UserService) -> None:
        self.task_service = task_service
        self.user_service = user_service

    async def execute(self, request: UpdateTaskRequest) -> UpdateTaskResponse:
        user = await load_actor(self.user_service, request.user_id)
        task = await self.task_service.update(
            TaskId(UUID(request.task_id)),
            user,
            name=request.task_name,
            is_done=request.is_done,
        )
        return UpdateTaskResponse(task=TaskItem.from_domain(task))


class DeleteTaskRequest(BaseModel):
    """Delete task request."""

    user_id: str
    task_id: str


class DeleteTaskResponse(BaseModel):
    """Delete task response."""

    task_id: str
    deleted: bool


class DeleteTaskUseCase:
    """Use case for deleting a task and its comments."""

    def __init__(self, task_service: TaskService, user_service: UserService) -> None:
        self.task_service = task_service
        self.user_service = user_service

    async def execute(self, request: DeleteTaskRequest) -> DeleteTaskResponse:
        user = await load_actor(self.user_service, request.user_id)
        await self.task_service.delete(TaskId(UUID(request.task_id)), user)
        return DeleteTaskResponse(task_id=request.task_id, deleted=True)
