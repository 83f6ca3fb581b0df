"""Project access policy.

One policy for every route: the access level is derived from the user and
the project on each call, never cached, so it always reflects the current
investor set.
"""

import logfire

from cluster.domain.error import ForbiddenError
from cluster.domain.model import Project, User
from cluster.domain.value import AccessLevel

from .base import Service


def access_level(user: User, project: Project) -> AccessLevel:
    """Derive the user's access level on a project.

    Super-admins resolve as owner-equivalent regardless of membership.
    """
    if user.is_super_admin or project.is_owner(user.id):
        return AccessLevel.OWNER
    if project.is_investor(user.id):
        return AccessLevel.INVESTOR
    return AccessLevel.NONE


class AccessService(Service):
    """Domain service answering "may this user touch this project?"."""

    def access_level(self, user: User, project: Project) -> AccessLevel:
        """Access level of ``user`` on ``project``."""
        return access_level(user, project)

    def can_access(self, user: User, project: Project) -> bool:
        """True for owners, investors and super-admins."""
        return access_level(user, project) != AccessLevel.NONE

    def verify_owner(self, user: User, project: Project) -> None:
        """Guard for every project mutation.

        Raises:
            ForbiddenError: If the user is neither owner nor super-admin
        """
        if user.is_super_admin or project.is_owner(user.id):
            return
        logfire.warn(
            "Owner check failed",
            user_id=str(user.id),
            project_id=str(project.id),
        )
        raise ForbiddenError(
            "Only the project owner can perform this action",
            code="FORBIDDEN_NOT_PROJECT_OWNER",
        )

    def verify_access(self, user: User, project: Project) -> AccessLevel:
        """Guard for reads and comments.

        Returns:
            The caller's access level

        Raises:
            ForbiddenError: If the user has no access to the project
        """
        level = access_level(user, project)
        if level == AccessLevel.NONE:
            logfire.warn(
                "Project access denied",
                user_id=str(user.id),
                project_id=str(project.id),
            )
            raise ForbiddenError(
                "You do not have access to this project",
                code="FORBIDDEN_NO_PROJECT_ACCESS",
            )
        return level
