"""Comment domain service."""

from uuid import uuid4

import logfire

from cluster.domain.error import ForbiddenError, NotFoundError, ValidationError
from cluster.domain.model import Comment, User
from cluster.domain.model.comment import COMMENT_TEXT_MAX_LENGTH
from cluster.domain.repository import CommentRepository
from cluster.domain.value import CommentId, TaskId

from .access_service import AccessService
from .base import Service
from .task_service import TaskService


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        task_service: TaskService,
        access_service: AccessService,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            task_service: Resolves the task and project a comment hangs off
            access_service: Project access policy
        """
        self.comment_repository = comment_repository
        self.task_service = task_service
        self.access_service = access_service

    async def create_comment(self, task_id: TaskId, author: User, text: str) -> Comment:
        """Comment on a task.

        Anyone with access to the task's project (owner, investor,
        super-admin) may comment.

        Raises:
            NotFoundError: If the task is missing
            ForbiddenError: If the author has no access to the project
            ValidationError: If the text is empty or too long
        """
        with logfire.span(
            "comment_service.create_comment",
            task_id=str(task_id),
            author_id=str(author.id),
        ):
            task, project = await self.task_service.get_with_project(task_id)
            self.access_service.verify_access(author, project)

            comment = Comment(
                id=CommentId(uuid4()),
                task_id=task.id,
                author_id=author.id,
                author_name=author.name,
                text=self._clean_text(text),
            )
            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created", comment_id=str(saved.id), task_id=str(task_id)
            )
            return saved

    async def get_comments(self, task_id: TaskId, actor: User) -> list[Comment]:
        """Comments on a task, oldest first.

        Raises:
            NotFoundError: If the task is missing
            ForbiddenError: If the actor has no access to the project
        """
        with logfire.span("comment_service.get_comments", task_id=str(task_id)):
            task, project = await self.task_service.get_with_project(task_id)
            self.access_service.verify_access(actor, project)
            comments = await self.comment_repository.find_by_task(task.id)
            logfire.info(
                "Comments retrieved", task_id=str(task_id), count=len(comments)
            )
            return comments

    async def update_comment(
        self, comment_id: CommentId, actor: User, text: str
    ) -> Comment:
        """Edit a comment. Only its author may do this.

        Raises:
            NotFoundError: If the comment is missing
            ForbiddenError: If the actor is not the author
        """
        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment_id),
            actor_id=str(actor.id),
        ):
            comment = await self._get(comment_id)
            if comment.author_id != actor.id:
                logfire.warn(
                    "Unauthorized comment edit attempt",
                    comment_id=str(comment_id),
                    author_id=str(comment.author_id),
                    actor_id=str(actor.id),
                )
                raise ForbiddenError(
                    "Only the author can edit this comment",
                    code="FORBIDDEN_NOT_COMMENT_AUTHOR",
                )

            updated = comment.touched(text=self._clean_text(text), is_edited=True)
            saved = await self.comment_repository.save(updated)
            logfire.info("Comment updated", comment_id=str(comment_id))
            return saved

    async def delete_comment(self, comment_id: CommentId, actor: User) -> None:
        """Delete a comment as its author or as the project owner.

        Raises:
            NotFoundError: If the comment is missing
            ForbiddenError: If the actor is neither author nor owner
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            actor_id=str(actor.id),
        ):
            comment = await self._get(comment_id)
            if comment.author_id != actor.id:
                _, project = await self.task_service.get_with_project(comment.task_id)
                self.access_service.verify_owner(actor, project)

            await self.comment_repository.delete(comment.id)
            logfire.info("Comment deleted", comment_id=str(comment_id))

    async def _get(self, comment_id: CommentId) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if not comment:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id), code="COMMENT_NOT_FOUND")
        return comment

    @staticmethod
    def _clean_text(text: str) -> str:
        cleaned = text.strip()
        if not cleaned:
            raise ValidationError("Comment text is required", code="COMMENT_TEXT_REQUIRED")
        if len(cleaned) > COMMENT_TEXT_MAX_LENGTH:
            raise ValidationError(
                f"Comment must be at most {COMMENT_TEXT_MAX_LENGTH} characters",
                code="COMMENT_TOO_LONG",
            )
        return cleaned
