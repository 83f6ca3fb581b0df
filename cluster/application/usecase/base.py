"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from cluster.domain.error import NotFoundError, UnauthenticatedError
from cluster.domain.model import User
from cluster.domain.service import UserService
from cluster.domain.value import UserId


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


async def load_actor(user_service: UserService, user_id: str) -> User:
    """Load the authenticated user behind a request.

    Raises:
        UnauthenticatedError: If the ID is malformed or the user is gone
    """
    try:
        return await user_service.get_by_id(UserId(UUID(user_id)))
    except (ValueError, NotFoundError):
        raise UnauthenticatedError("User not found", code="AUTH_ERROR_USER_NOT_FOUND")
