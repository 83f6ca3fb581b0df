"""Add tasks use case."""

from datetime import datetime
from typing import Any
from uuid import UUID

import logfire
from pydantic import BaseModel

from cluster.application.usecase.base import load_actor
from cluster.domain.model import Task
from cluster.domain.service import TaskService, UserService
from cluster.domain.value import StageId


class TaskItem(BaseModel):
    """Task in API responses."""

    task_id: str
    stage_id: str
    task_name: str
    is_done: bool
    is_edited: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, task: Task) -> "TaskItem":
        """Convert domain Task to response model."""
        return cls(
            task_id=str(task.id),
            stage_id=str(task.stage_id),
            task_name=task.name,
            is_done=task.is_done,
            is_edited=task.is_edited,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class AddTasksRequest(BaseModel):
    """Add tasks request.

    ``tasks`` is deliberately loose; the domain normalizes it.
    """

    user_id: str
    stage_id: str
    tasks: Any = None


class AddTasksResponse(BaseModel):
    """Add tasks response."""

    tasks: list[TaskItem]


class AddTasksUseCase:
    """Use case for bulk-adding tasks to a stage."""

    def __init__(self, task_service: TaskService, user_service: UserService) -> None:
        self.task_service = task_service
        self.user_service = user_service

    async def execute(self, request: AddTasksRequest) -> AddTasksResponse:
        """Add the tasks.

        Raises:
            ValidationError: INVALID_TASKS_FORMAT or AT_LEAST_ONE_TASK_REQUIRED
            ForbiddenError: If the caller does not own the project
        """
        with logfire.span("add_tasks.execute", stage_id=request.stage_id):
            user = await load_actor(self.user_service, request.user_id)
            tasks = await self.task_service.add_tasks(
                StageId(UUID(request.stage_id)), user, request.tasks
            )
            return AddTasksResponse(tasks=[TaskItem.from_domain(t) for t in tasks])
