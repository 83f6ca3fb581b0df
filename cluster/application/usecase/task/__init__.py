"""Task use cases."""

from cluster.application.usecase.task.add_tasks import (
    AddTasksRequest,
    AddTasksResponse,
    AddTasksUseCase,
    TaskItem,
)
from cluster.application.usecase.task.manage_tasks import (
    DeleteTaskRequest,
    DeleteTaskResponse,
    DeleteTaskUseCase,
    ListTasksRequest,
    ListTasksResponse,
    ListTasksUseCase,
    UpdateTaskRequest,
    UpdateTaskResponse,
    UpdateTaskUseCase,
)

__all__ = [
    "AddTasksRequest",
    "AddTasksResponse",
    "AddTasksUseCase",
    "DeleteTaskRequest",
    "DeleteTaskResponse",
    "DeleteTaskUseCase",
    "ListTasksRequest",
    "ListTasksResponse",
    "ListTasksUseCase",
    "TaskItem",
    "UpdateTaskRequest",
    "UpdateTaskResponse",
    "UpdateTaskUseCase",
]
