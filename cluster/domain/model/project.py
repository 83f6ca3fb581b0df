"""Project aggregate root.

A project has exactly one owner (fixed at creation) and a set of investors
who joined through accepted invitations.
"""

from datetime import date
from typing import Optional

from pydantic import Field, model_validator

from cluster.domain.model.common import TimestampedModel
from cluster.domain.value import ProjectId, ProjectStatus, UserId

PROJECT_NAME_MIN_LENGTH = 3
PROJECT_NAME_MAX_LENGTH = 25


class Project(TimestampedModel):
    """Project aggregate root.

    Business rules:
    - owner_id never changes after creation
    - owner_id is never in investor_ids
    - investor_ids has no duplicates
    """

    id: ProjectId
    name: str = Field(
        min_length=PROJECT_NAME_MIN_LENGTH, max_length=PROJECT_NAME_MAX_LENGTH
    )
    description: Optional[str] = None
    owner_id: UserId
    investor_ids: tuple[UserId, ...] = ()
    status: ProjectStatus = ProjectStatus.PLANNING
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_membership(self) -> "Project":
        """Enforce owner exclusion and investor uniqueness."""
        if self.owner_id in self.investor_ids:
            raise ValueError("Project owner cannot also be an investor")
        if len(set(self.investor_ids)) != len(self.investor_ids):
            raise ValueError("Duplicate investor in project")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    def is_owner(self, user_id: UserId) -> bool:
        return self.owner_id == user_id

    def is_investor(self, user_id: UserId) -> bool:
        return user_id in self.investor_ids
