"""Comment repository interface."""

from abc import ABC, abstractmethod

from cluster.domain.model.comment import Comment
from cluster.domain.value import CommentId, TaskId


class CommentRepository(ABC):
    """Repository for Comment entity."""

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Comment | None:
        """Find a comment by ID."""
        pass

    @abstractmethod
    async def find_by_task(self, task_id: TaskId) -> list[Comment]:
        """List comments of a task, oldest first."""
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        pass

    @abstractmethod
    async def delete_by_task(self, task_id: TaskId) -> int:
        """Delete every comment of a task."""
        pass
