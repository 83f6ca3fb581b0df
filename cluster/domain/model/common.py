"""Base model for all domain entities."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from cluster.domain.value.common import utc_now


class DomainModel(BaseModel):
    """Base class for all domain models.

    Entities are immutable; services produce changed copies with
    ``model_copy(update=...)`` and hand them to a repository.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )


class TimestampedModel(DomainModel):
    """Domain model carrying creation and last-update timestamps."""

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def touched(self, **changes):
        """Return a re-validated copy with ``changes`` and a fresh ``updated_at``.

        Raises:
            pydantic.ValidationError: If the changes break a field rule
        """
        data = {**self.model_dump(), **changes, "updated_at": utc_now()}
        return type(self).model_validate(data)
