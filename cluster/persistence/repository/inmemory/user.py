"""In-memory user repository for testing."""

from typing import Optional

from cluster.domain.model.user import User
from cluster.domain.repository.user import UserRepository
from cluster.domain.value import EmailAddress, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_external_id(self, external_id: str) -> Optional[User]:
        """Find a user by identity-provider ID."""
        for user in self._users.values():
            if user.external_id == external_id:
                return user
        return None

    async def find_by_email(self, email: EmailAddress) -> Optional[User]:
        """Find a user by normalized email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Bulk lookup by ID."""
        return [self._users[uid] for uid in user_ids if uid in self._users]

    async def find_all(self, limit: int = 100, offset: int = 0) -> list[User]:
        """List users ordered by creation time."""
        users = sorted(self._users.values(), key=lambda u: u.created_at)
        return users[offset : offset + limit]

    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        self._users[user.id] = user
        return user

    async def delete(self, user_id: UserId) -> None:
        """Delete a user."""
        self._users.pop(user_id, None)
