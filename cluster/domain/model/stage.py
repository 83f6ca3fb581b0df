"""Stage entity - an ordered phase of a project."""

from typing import Optional

from pydantic import Field

from cluster.domain.model.common import TimestampedModel
from cluster.domain.value import ProjectId, StageId, UserId

STAGE_NAME_MAX_LENGTH = 10
STAGE_DESCRIPTION_MAX_LENGTH = 25


class Stage(TimestampedModel):
    """Stage entity."""

    id: StageId
    project_id: ProjectId
    owner_id: UserId
    name: str = Field(min_length=1, max_length=STAGE_NAME_MAX_LENGTH)
    description: Optional[str] = Field(
        default=None, max_length=STAGE_DESCRIPTION_MAX_LENGTH
    )
    is_done: bool = False
