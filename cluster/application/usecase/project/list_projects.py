"""List projects use cases."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from cluster.application.usecase.base import load_actor
from cluster.application.usecase.project.create_project import ProjectItem
from cluster.domain.error import ForbiddenError
from cluster.domain.service import AccessService, ProjectService, UserService
from cluster.domain.value import UserId


class ListProjectsRequest(BaseModel):
    """List projects request.

    ``target_user_id`` selects another user's projects (self or super-admin
    only); None lists what the caller can see.
    """

    user_id: str
    target_user_id: str | None = None


class ListProjectsResponse(BaseModel):
    """List projects response."""

    projects: list[ProjectItem]
    total: int


class ListProjectsUseCase:
    """Use case for project listings."""

    def __init__(
        self,
        project_service: ProjectService,
        access_service: AccessService,
        user_service: UserService,
    ) -> None:
        self.project_service = project_service
        self.access_service = access_service
        self.user_service = user_service

    async def execute(self, request: ListProjectsRequest) -> ListProjectsResponse:
        """List projects.

        Raises:
            ForbiddenError: If listing another user's projects without being
                super-admin
        """
        with logfire.span(
            "list_projects.execute",
            user_id=request.user_id,
            target_user_id=request.target_user_id,
        ):
            user = await load_actor(self.user_service, request.user_id)

            if request.target_user_id is None:
                projects = await self.project_service.list_visible(user)
            else:
                target_id = UserId(UUID(request.target_user_id))
                if target_id != user.id and not user.is_super_admin:
                    raise ForbiddenError(
                        "You can only list your own projects",
                        code="FORBIDDEN_NOT_SAME_USER",
                    )
                projects = await self.project_service.list_for_user(target_id)

            items = [
                ProjectItem.from_domain(p, self.access_service.access_level(user, p))
                for p in projects
            ]
            return ListProjectsResponse(projects=items, total=len(items))
