"""Get user use cases."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from cluster.application.usecase.base import load_actor
from cluster.application.usecase.project.create_project import ProjectItem
from cluster.domain.model import User
from cluster.domain.service import ProjectService, UserService
from cluster.domain.value import UserId, UserRole


class UserItem(BaseModel):
    """User in API responses."""

    user_id: str
    external_id: str
    role: UserRole
    email: str | None
    display_name: str | None
    created_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserItem":
        """Convert domain User to response model."""
        return cls(
            user_id=str(user.id),
            external_id=user.external_id,
            role=user.role,
            email=user.email.root if user.email else None,
            display_name=user.display_name,
            created_at=user.created_at,
        )


class GetUserRequest(BaseModel):
    """Get user request.

    ``target_user_id`` None means the caller.
    """

    user_id: str
    target_user_id: str | None = None


class GetUserResponse(BaseModel):
    """User profile with the projects they own or invest in."""

    user: UserItem
    projects: list[ProjectItem]


class GetUserUseCase:
    """Use case for reading a user profile."""

    def __init__(
        self, user_service: UserService, project_service: ProjectService
    ) -> None:
        """Initialize get user use case.

        Args:
            user_service: User domain service
            project_service: Project domain service
        """
        self.user_service = user_service
        self.project_service = project_service

    async def execute(self, request: GetUserRequest) -> GetUserResponse:
        """Load the user and their projects.

        Raises:
            UnauthenticatedError: If the caller is unknown
            NotFoundError: If the target user does not exist
        """
        caller = await load_actor(self.user_service, request.user_id)
        if request.target_user_id is None:
            user = caller
        else:
            user = await self.user_service.get_by_id(
                UserId(UUID(request.target_user_id))
            )

        projects = await self.project_service.list_for_user(user.id)
        return GetUserResponse(
            user=UserItem.from_domain(user),
            projects=[ProjectItem.from_domain(p) for p in projects],
        )
