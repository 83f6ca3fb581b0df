"""List users use case."""

from pydantic import BaseModel, Field

from cluster.application.usecase.base import load_actor
from cluster.application.usecase.user.get_user import UserItem
from cluster.domain.service import UserService


class ListUsersRequest(BaseModel):
    """List users request."""

    user_id: str
    limit: int = Field(default=100, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class ListUsersResponse(BaseModel):
    """List users response."""

    users: list[UserItem]
    total: int


class ListUsersUseCase:
    """Use case for the user directory."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: ListUsersRequest) -> ListUsersResponse:
        await load_actor(self.user_service, request.user_id)
        users = await self.user_service.list_users(
            limit=request.limit, offset=request.offset
        )
        items = [UserItem.from_domain(u) for u in users]
        return ListUsersResponse(users=items, total=len(items))
