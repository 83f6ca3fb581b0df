"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cluster.domain.model import User
from cluster.domain.repository import UserRepository
from cluster.domain.value import EmailAddress, UserId
from cluster.persistence.mappers import row_to_user, user_to_dict
from cluster.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_external_id(self, external_id: str) -> Optional[User]:
        """Find a user by identity-provider ID."""
        stmt = select(users_table).where(users_table.c.external_id == external_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: EmailAddress) -> Optional[User]:
        """Find a user by their (normalized) email."""
        stmt = (
            select(users_table)
            .where(users_table.c.email == email.root)
            .order_by(users_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Bulk lookup by ID."""
        if not user_ids:
            return []
        stmt = select(users_table).where(users_table.c.id.in_(user_ids))
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings()]

    async def find_all(self, limit: int = 100, offset: int = 0) -> list[User]:
        """List users ordered by creation time."""
        stmt = (
            select(users_table)
            .order_by(users_table.c.created_at)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings()]

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        user_dict = user_to_dict(user)

        existing = await self.find_by_id(user.id)

        if existing:
            stmt = (
                update(users_table)
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
            await self.session.execute(stmt)
        else:
            stmt = insert(users_table).values(**user_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return user

    async def delete(self, user_id: UserId) -> None:
        """Delete a user."""
        stmt = delete(users_table).where(users_table.c.id == user_id)
        await self.session.execute(stmt)
        await self.session.flush()
