"""Base classes for value objects and the domain clock."""

from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel


class ValueObject(BaseModel):
    """Base class for composite value objects (compared by value)."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Base class for value objects wrapping a single primitive.

    The wrapped value lives in ``.root`` and ``model_dump()`` returns the
    primitive itself, so these serialize transparently in API responses.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime.

    All persisted timestamps are ``TIMESTAMP WITH TIME ZONE``; comparing them
    against naive datetimes raises, so every clock read goes through here.
    """
    return datetime.now(timezone.utc)
