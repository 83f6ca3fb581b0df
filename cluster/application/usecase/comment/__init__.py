"""Comment use cases."""

from cluster.application.usecase.comment.create_comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from cluster.application.usecase.comment.get_comments import (
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from cluster.application.usecase.comment.update_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)

__all__ = [
    "CommentItem",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
    "UpdateCommentRequest",
    "UpdateCommentResponse",
    "UpdateCommentUseCase",
]
