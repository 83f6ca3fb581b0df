"""User domain service."""

from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from cluster.domain.error import NotFoundError
from cluster.domain.model import User
from cluster.domain.repository import UserRepository
from cluster.domain.value import EmailAddress, UserId, UserRole

from .base import Service
from .project_service import ProjectService


class UserService(Service):
    """Domain service for the user directory.

    Users are created, updated and deleted by identity-provider events;
    the rest of the system only reads them.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        project_service: ProjectService,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            project_service: Used to cascade account removal to owned projects
        """
        self.user_repository = user_repository
        self.project_service = project_service

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id), code="USER_NOT_FOUND")
            logfire.info("User found", user_id=str(user_id))
            return user

    async def get_by_external_id(self, external_id: str) -> User | None:
        """Get user by identity-provider ID."""
        with logfire.span("user_service.get_by_external_id", external_id=external_id):
            return await self.user_repository.find_by_external_id(external_id)

    async def get_names(self, user_ids: list[UserId]) -> dict[UserId, str]:
        """Display names for a batch of users; unknown IDs are left out."""
        users = await self.user_repository.find_by_ids(list(set(user_ids)))
        return {user.id: user.name for user in users}

    async def get_by_email(self, email: EmailAddress) -> User | None:
        """Get user by normalized email."""
        return await self.user_repository.find_by_email(email)

    async def list_users(self, limit: int = 100, offset: int = 0) -> list[User]:
        """List users ordered by creation time."""
        with logfire.span("user_service.list_users", limit=limit, offset=offset):
            users = await self.user_repository.find_all(limit=limit, offset=offset)
            logfire.info("Users listed", count=len(users))
            return users

    async def upsert_from_identity(
        self,
        external_id: str,
        email: str | None = None,
        display_name: str | None = None,
        role: UserRole | None = None,
    ) -> User:
        """Create or update the local mirror of an identity-provider user.

        Args:
            external_id: Provider user ID
            email: Primary email address, if any
            display_name: Human-readable name, if any
            role: Role from provider metadata; keeps the current role (or
                the default for new users) when None

        Returns:
            The saved user
        """
        with logfire.span(
            "user_service.upsert_from_identity",
            external_id=external_id,
            role=role.value if role else None,
        ):
            address = self._parse_email(external_id, email)
            existing = await self.user_repository.find_by_external_id(external_id)

            if existing:
                changes: dict = {"email": address, "display_name": display_name}
                if role is not None:
                    changes["role"] = role
                saved = await self.user_repository.save(existing.touched(**changes))
                logfire.info(
                    "User updated from identity provider",
                    user_id=str(saved.id),
                    role=saved.role.value,
                )
                return saved

            user = User(
                id=UserId(uuid4()),
                external_id=external_id,
                role=role or UserRole.PROJECT_OWNER,
                email=address,
                display_name=display_name,
            )
            saved = await self.user_repository.save(user)
            logfire.info(
                "User created from identity provider",
                user_id=str(saved.id),
                role=saved.role.value,
            )
            return saved

    async def delete_by_external_id(self, external_id: str) -> bool:
        """Remove a user and every project they own.

        Returns:
            True if a user was deleted, False if none was known
        """
        with logfire.span(
            "user_service.delete_by_external_id", external_id=external_id
        ):
            user = await self.user_repository.find_by_external_id(external_id)
            if not user:
                logfire.warn("User to delete not found", external_id=external_id)
                return False

            projects = await self.project_service.delete_owned_by(user.id)
            await self.user_repository.delete(user.id)
            logfire.info(
                "User deleted", user_id=str(user.id), owned_projects=projects
            )
            return True

    @staticmethod
    def _parse_email(external_id: str, email: str | None) -> EmailAddress | None:
        if not email:
            return None
        try:
            return EmailAddress(email)
        except PydanticValidationError:
            logfire.warn(
                "Ignoring malformed email from identity provider",
                external_id=external_id,
            )
            return None
