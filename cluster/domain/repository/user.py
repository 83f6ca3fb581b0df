"""User repository interface."""

from abc import ABC, abstractmethod

from cluster.domain.model.user import User
from cluster.domain.value import EmailAddress, UserId


class UserRepository(ABC):
    """Repository for User aggregate."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> User | None:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_external_id(self, external_id: str) -> User | None:
        """Find a user by identity-provider ID.

        Args:
            external_id: Opaque ID issued by the identity provider

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: EmailAddress) -> User | None:
        """Find a user by normalized email."""
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Bulk lookup; missing IDs are skipped."""
        pass

    @abstractmethod
    async def find_all(self, limit: int = 100, offset: int = 0) -> list[User]:
        """List users ordered by creation time."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> None:
        """Delete a user."""
        pass
