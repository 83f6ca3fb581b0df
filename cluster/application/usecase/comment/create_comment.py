"""Create comment use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from cluster.application.usecase.base import load_actor
from cluster.domain.model import Comment
from cluster.domain.service import CommentService, UserService
from cluster.domain.value import TaskId


class CommentItem(BaseModel):
    """Comment in API responses."""

    comment_id: str
    task_id: str
    author_id: str
    author_name: str
    text: str
    is_edited: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentItem":
        """Convert domain Comment to response model."""
        return cls(
            comment_id=str(comment.id),
            task_id=str(comment.task_id),
            author_id=str(comment.author_id),
            author_name=comment.author_name,
            text=comment.text,
            is_edited=comment.is_edited,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    user_id: str  # Author, from auth
    task_id: str
    text: str


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentItem


class CreateCommentUseCase:
    """Use case for commenting on a task."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            user_service: User domain service
        """
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Raises:
            NotFoundError: If the task does not exist
            ForbiddenError: If the caller has no access to the project
            ValidationError: If the text is empty or too long
        """
        with logfire.span("create_comment.execute", task_id=request.task_id):
            author = await load_actor(self.user_service, request.user_id)
            comment = await self.comment_service.create_comment(
                TaskId(UUID(request.task_id)), author, request.text
            )
            return CreateCommentResponse(comment=CommentItem.from_domain(comment))
