"""Task routes."""

from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel

from cluster.application.usecase.task import (
    AddTasksRequest,
    AddTasksResponse,
    AddTasksUseCase,
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
from cluster.domain.service import JWTService
from cluster.interface.api.auth import SESSION_COOKIE, require_user_id

router = APIRouter(prefix="/tasks", tags=["tasks"], route_class=DishkaRoute)


class AddTasksAPIRequest(BaseModel):
    """API request for adding tasks.

    ``tasks`` may be ``"a, b"``, ``["a", "b"]``, ``[{"task_name": "a"}]``
    or ``{"task_name": "a"}``.
    """

    tasks: Any = None


class UpdateTaskAPIRequest(BaseModel):
    """API request for editing a task."""

    task_name: str | None = None
    is_done: bool | None = None


@router.post(
    "/{stage_id}/add",
    response_model=AddTasksResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_tasks(
    stage_id: str,
    request: AddTasksAPIRequest,
    add_tasks_use_case: FromDishka[AddTasksUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> AddTasksResponse:
    """Bulk-add tasks to a stage (owner or super-admin)."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await add_tasks_use_case.execute(
        AddTasksRequest(user_id=user_id, stage_id=stage_id, tasks=request.tasks)
    )


@router.get("/{stage_id}", response_model=ListTasksResponse)
async def list_tasks(
    stage_id: str,
    list_tasks_use_case: FromDishka[ListTasksUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> ListTasksResponse:
    """Tasks of a stage."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await list_tasks_use_case.execute(
        ListTasksRequest(user_id=user_id, stage_id=stage_id)
    )


@router.patch("/{task_id}", response_model=UpdateTaskResponse)
async def update_task(
    task_id: str,
    request: UpdateTaskAPIRequest,
    update_task_use_case: FromDishka[UpdateTaskUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> UpdateTaskResponse:
    """Rename a task or toggle its done flag."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await update_task_use_case.execute(
        UpdateTaskRequest(
            user_id=user_id,
            task_id=task_id,
            task_name=request.task_name,
            is_done=request.is_done,
        )
    )


@router.delete("/{task_id}", response_model=DeleteTaskResponse)
async def delete_task(
    task_id: str,
    delete_task_use_case: FromDishka[DeleteTaskUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> DeleteTaskResponse:
    """Delete a task and its comments."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await delete_task_use_case.execute(
        DeleteTaskRequest(user_id=user_id, task_id=task_id)
    )
