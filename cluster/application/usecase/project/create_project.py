"""Create project use case."""

from datetime import date, datetime

import logfire
from pydantic import BaseModel, Field

from cluster.application.usecase.base import BaseUseCase, load_actor
from cluster.domain.model import Project
from cluster.domain.service import ProjectService, UserService
from cluster.domain.value import AccessLevel, ProjectStatus


class ProjectItem(BaseModel):
    """Project in API responses."""

    project_id: str
    name: str
    description: str | None
    owner_id: str
    investor_ids: list[str]
    status: ProjectStatus
    start_date: date | None
    end_date: date | None
    created_at: datetime
    updated_at: datetime
    access_level: AccessLevel | None = None  # Caller's level, where known

    @classmethod
    def from_domain(
        cls, project: Project, access_level: AccessLevel | None = None
    ) -> "ProjectItem":
        """Convert domain Project to response model."""
        return cls(
            project_id=str(project.id),
            name=project.name,
            description=project.description,
            owner_id=str(project.owner_id),
            investor_ids=[str(i) for i in project.investor_ids],
            status=project.status,
            start_date=project.start_date,
            end_date=project.end_date,
            created_at=project.created_at,
            updated_at=project.updated_at,
            access_level=access_level,
        )


class CreateProjectRequest(BaseModel):
    """Create project request."""

    user_id: str  # Becomes the owner
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    status: ProjectStatus = ProjectStatus.PLANNING
    start_date: date | None = None
    end_date: date | None = None


class CreateProjectResponse(BaseModel):
    """Create project response."""

    project: ProjectItem


class CreateProjectUseCase(BaseUseCase):
    """Use case for creating a project owned by the caller."""

    def __init__(
        self, project_service: ProjectService, user_service: UserService
    ) -> None:
        """Initialize use case.

        Args:
            project_service: Project domain service
            user_service: User domain service
        """
        self.project_service = project_service
        self.user_service = user_service

    async def execute(self, request: CreateProjectRequest) -> CreateProjectResponse:
        """Create the project.

        Raises:
            UnauthenticatedError: If the caller is unknown
            ValidationError: If the name or dates are invalid
        """
        with logfire.span("create_project.execute", user_id=request.user_id):
            owner = await load_actor(self.user_service, request.user_id)
            project = await self.project_service.create(
                owner=owner,
                name=request.name,
                description=request.description,
                status=request.status,
                start_date=request.start_date,
                end_date=request.end_date,
            )
            return CreateProjectResponse(
                project=ProjectItem.from_domain(project, AccessLevel.OWNER)
            )
