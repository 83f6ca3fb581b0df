"""Comment entity.

Comments are flat free-text notes attached to a task.
"""

from pydantic import Field

from cluster.domain.model.common import TimestampedModel
from cluster.domain.value import CommentId, TaskId, UserId

COMMENT_TEXT_MAX_LENGTH = 250


class Comment(TimestampedModel):
    """Comment entity.

    ``author_name`` is denormalized from the author at creation time.
    ``is_edited`` flips to True on the first edit and stays there.
    """

    id: CommentId
    task_id: TaskId
    author_id: UserId
    author_name: str
    text: str = Field(min_length=1, max_length=COMMENT_TEXT_MAX_LENGTH)
    is_edited: bool = False
