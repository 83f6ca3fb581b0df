"""Update and delete comment use cases."""

from uuid import UUID

from pydantic import BaseModel

from cluster.application.usecase.base import load_actor
from cluster.application.usecase.comment.create_comment import CommentItem
from cluster.domain.service import CommentService, UserService
from cluster.domain.value import CommentId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    user_id: str  # Current user ID (must be author)
    comment_id: str
    text: str


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment: CommentItem


class UpdateCommentUseCase:
    """Use case for editing a comment's text."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Raises:
            ForbiddenError: If the caller is not the author
        """
        user = await load_actor(self.user_service, request.user_id)
        comment = await self.comment_service.update_comment(
            CommentId(UUID(request.comment_id)), user, request.text
        )
        return UpdateCommentResponse(comment=CommentItem.from_domain(comment))


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    user_id: str
    comment_id: str


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    deleted: bool


class DeleteCommentUseCase:
    """Use case for deleting a comment."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            ForbiddenError: If the caller is neither author nor project owner
        """
        user = await load_actor(self.user_service, request.user_id)
        await self.comment_service.delete_comment(
            CommentId(UUID(request.comment_id)), user
        )
        return DeleteCommentResponse(comment_id=request.comment_id, deleted=True)
