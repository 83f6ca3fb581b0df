"""Project use cases."""

from cluster.application.usecase.project.create_project import (
    CreateProjectRequest,
    CreateProjectResponse,
    CreateProjectUseCase,
    ProjectItem,
)
from cluster.application.usecase.project.delete_project import (
    DeleteProjectRequest,
    DeleteProjectResponse,
    DeleteProjectUseCase,
)
from cluster.application.usecase.project.get_project import (
    GetProjectRequest,
    GetProjectResponse,
    GetProjectUseCase,
)
from cluster.application.usecase.project.list_projects import (
    ListProjectsRequest,
    ListProjectsResponse,
    ListProjectsUseCase,
)
from cluster.application.usecase.project.remove_investor import (
    RemoveInvestorRequest,
    RemoveInvestorResponse,
    RemoveInvestorUseCase,
)
from cluster.application.usecase.project.update_project import (
    ChangeProjectStatusRequest,
    ChangeProjectStatusUseCase,
    UpdateProjectRequest,
    UpdateProjectResponse,
    UpdateProjectUseCase,
)

__all__ = [
    "ChangeProjectStatusRequest",
    "ChangeProjectStatusUseCase",
    "CreateProjectRequest",
    "CreateProjectResponse",
    "CreateProjectUseCase",
    "DeleteProjectRequest",
    "DeleteProjectResponse",
    "DeleteProjectUseCase",
    "GetProjectRequest",
    "GetProjectResponse",
    "GetProjectUseCase",
    "ListProjectsRequest",
    "ListProjectsResponse",
    "ListProjectsUseCase",
    "ProjectItem",
    "RemoveInvestorRequest",
    "RemoveInvestorResponse",
    "RemoveInvestorUseCase",
    "UpdateProjectRequest",
    "UpdateProjectResponse",
    "UpdateProjectUseCase",
]
