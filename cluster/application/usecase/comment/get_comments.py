"""Get comments use case."""

from uuid import UUID

from pydantic import BaseModel

from cluster.application.usecase.base import load_actor
from cluster.application.usecase.comment.create_comment import CommentItem
from cluster.domain.service import CommentService, UserService
from cluster.domain.value import TaskId


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    user_id: str
    task_id: str


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    comments: list[CommentItem]
    total: int


class GetCommentsUseCase:
    """Use case for listing comments on a task."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        user = await load_actor(self.user_service, request.user_id)
        comments = await self.comment_service.get_comments(
            TaskId(UUID(request.task_id)), user
        )
        items = [CommentItem.from_domain(c) for c in comments]
        return GetCommentsResponse(comments=items, total=len(items))
