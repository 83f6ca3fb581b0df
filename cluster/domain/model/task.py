"""Task entity - a unit of work inside a stage."""

from pydantic import Field

from cluster.domain.model.common import TimestampedModel
from cluster.domain.value import StageId, TaskId, UserId

TASK_NAME_MIN_LENGTH = 3
TASK_NAME_MAX_LENGTH = 100


class Task(TimestampedModel):
    """Task entity."""

    id: TaskId
    stage_id: StageId
    owner_id: UserId
    name: str = Field(min_length=TASK_NAME_MIN_LENGTH, max_length=TASK_NAME_MAX_LENGTH)
    is_done: bool = False
    is_edited: bool = False
