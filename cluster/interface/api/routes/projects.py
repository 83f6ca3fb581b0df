"""Project routes."""

from datetime import date

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from cluster.application.usecase.project import (
    ChangeProjectStatusRequest,
    ChangeProjectStatusUseCase,
    CreateProjectRequest,
    CreateProjectResponse,
    CreateProjectUseCase,
    DeleteProjectRequest,
    DeleteProjectResponse,
    DeleteProjectUseCase,
    GetProjectRequest,
    GetProjectResponse,
    GetProjectUseCase,
    ListProjectsRequest,
    ListProjectsResponse,
    ListProjectsUseCase,
    UpdateProjectRequest,
    UpdateProjectResponse,
    UpdateProjectUseCase,
)
from cluster.application.usecase.stage import (
    CreateStageRequest,
    CreateStageResponse,
    CreateStageUseCase,
    ListStagesRequest,
    ListStagesResponse,
    ListStagesUseCase,
)
from cluster.domain.service import JWTService
from cluster.domain.value import ProjectStatus
from cluster.interface.api.auth import SESSION_COOKIE, require_user_id

router = APIRouter(prefix="/projects", tags=["projects"], route_class=DishkaRoute)


class CreateProjectAPIRequest(BaseModel):
    """API request for creating a project."""

    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    status: ProjectStatus = ProjectStatus.PLANNING
    start_date: date | None = None
    end_date: date | None = None


class UpdateProjectAPIRequest(BaseModel):
    """API request for editing a project; omitted fields are left alone."""

    name: str | None = None
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None


class ChangeStatusAPIRequest(BaseModel):
    """API request for changing project status."""

    status: ProjectStatus


class CreateStageAPIRequest(BaseModel):
    """API request for adding a stage."""

    name: str = Field(min_length=1, max_length=10)
    description: str | None = Field(default=None, max_length=25)


@router.post(
    "", response_model=CreateProjectResponse, status_code=status.HTTP_201_CREATED
)
async def create_project(
    request: CreateProjectAPIRequest,
    create_project_use_case: FromDishka[CreateProjectUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> CreateProjectResponse:
    """Create a project owned by the caller."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await create_project_use_case.execute(
        CreateProjectRequest(user_id=user_id, **request.model_dump())
    )


@router.get("", response_model=ListProjectsResponse)
async def list_projects(
    list_projects_use_case: FromDishka[ListProjectsUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> ListProjectsResponse:
    """Projects on the caller's dashboard (all projects for super-admins)."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await list_projects_use_case.execute(ListProjectsRequest(user_id=user_id))


@router.get("/user/{target_user_id}", response_model=ListProjectsResponse)
async def list_user_projects(
    target_user_id: str,
    list_projects_use_case: FromDishka[ListProjectsUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> ListProjectsResponse:
    """Projects a given user owns or invests in (self or super-admin)."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await list_projects_use_case.execute(
        ListProjectsRequest(user_id=user_id, target_user_id=target_user_id)
    )


@router.get("/{project_id}", response_model=GetProjectResponse)
async def get_project(
    project_id: str,
    get_project_use_case: FromDishka[GetProjectUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> GetProjectResponse:
    """Project detail with stages and the caller's access level."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await get_project_use_case.execute(
        GetProjectRequest(user_id=user_id, project_id=project_id)
    )


@router.patch("/{project_id}", response_model=UpdateProjectResponse)
async def update_project(
    project_id: str,
    request: UpdateProjectAPIRequest,
    update_project_use_case: FromDishka[UpdateProjectUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> UpdateProjectResponse:
    """Edit name, description or dates (owner or super-admin)."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await update_project_use_case.execute(
        UpdateProjectRequest(
            user_id=user_id,
            project_id=project_id,
            **request.model_dump(exclude_unset=True),
        )
    )


@router.patch("/{project_id}/status", response_model=UpdateProjectResponse)
async def change_project_status(
    project_id: str,
    request: ChangeStatusAPIRequest,
    change_status_use_case: FromDishka[ChangeProjectStatusUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> UpdateProjectResponse:
    """Move the project to another status (owner or super-admin)."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await change_status_use_case.execute(
        ChangeProjectStatusRequest(
            user_id=user_id, project_id=project_id, status=request.status
        )
    )


@router.delete("/{project_id}", response_model=DeleteProjectResponse)
async def delete_project(
    project_id: str,
    delete_project_use_case: FromDishka[DeleteProjectUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> DeleteProjectResponse:
    """Delete the project with its stages, tasks, comments and invitations."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await delete_project_use_case.execute(
        DeleteProjectRequest(user_id=user_id, project_id=project_id)
    )


@router.post(
    "/{project_id}/stages",
    response_model=CreateStageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_stage(
    project_id: str,
    request: CreateStageAPIRequest,
    create_stage_use_case: FromDishka[CreateStageUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> CreateStageResponse:
    """Add a stage to the project (owner or super-admin)."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await create_stage_use_case.execute(
        CreateStageRequest(
            user_id=user_id,
            project_id=project_id,
            name=request.name,
            description=request.description,
        )
    )


@router.get("/{project_id}/stages", response_model=ListStagesResponse)
async def list_stages(
    project_id: str,
    list_stages_use_case: FromDishka[ListStagesUseCase],
    jwt_service: FromDishka[JWTService],
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    authorization: str | None = Header(default=None),
) -> ListStagesResponse:
    """Stages of the project with their tasks."""
    user_id = await require_user_id(jwt_service, session_token, authorization)
    return await list_stages_use_case.execute(
        ListStagesRequest(user_id=user_id, project_id=project_id)
    )
