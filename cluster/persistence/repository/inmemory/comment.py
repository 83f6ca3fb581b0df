"""In-memory comment repository for testing."""

from typing import Optional

from cluster.domain.model.comment import Comment
from cluster.domain.repository.comment import CommentRepository
from cluster.domain.value import CommentId, TaskId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_task(self, task_id: TaskId) -> list[Comment]:
        """Comments on a task, oldest first."""
        return sorted(
            (c for c in self._comments.values() if c.task_id == task_id),
            key=lambda c: c.created_at,
        )

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        self._comments[comment.id] = comment
        return comment

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        self._comments.pop(comment_id, None)

    async def delete_by_task(self, task_id: TaskId) -> int:
        """Delete every comment on a task."""
        doomed = [cid for cid, c in self._comments.items() if c.task_id == task_id]
        for comment_id in doomed:
            del self._comments[comment_id]
        return len(doomed)
