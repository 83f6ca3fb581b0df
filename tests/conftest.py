"""Test configuration and fixtures."""

import os
from datetime import datetime, timedelta, timezone
from uuid import uuid4

# Settings() reads the environment lazily, so this must run before any
# container resolves it.
TEST_WEBHOOK_SECRET = "whsec_dGVzdC13ZWJob29rLXNpZ25pbmctc2VjcmV0"
TEST_ISSUER = "https://identity.cluster.test"

os.environ["ENVIRONMENT"] = "test"
os.environ["AUTH__ISSUER"] = TEST_ISSUER
os.environ["AUTH__WEBHOOK_SECRET"] = TEST_WEBHOOK_SECRET
os.environ["EMAIL__ENABLED"] = "false"
os.environ["INVITATIONS__SWEEP_ENABLED"] = "false"
os.environ.setdefault("OBSERVABILITY__SEND_TO_LOGFIRE", "false")

from cluster.domain.model import Project, User  # noqa: E402
from cluster.domain.value import (  # noqa: E402
    EmailAddress,
    ProjectId,
    UserId,
    UserRole,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_user(
    email: str | None = "someone@example.com",
    role: UserRole = UserRole.PROJECT_OWNER,
    display_name: str | None = None,
) -> User:
    """Build a user with a random ID and external ID."""
    return User(
        id=UserId(uuid4()),
        external_id=f"user_{uuid4().hex[:12]}",
        role=role,
        email=EmailAddress(email) if email else None,
        display_name=display_name,
    )


def make_project(owner: User, name: str = "Solar Farm", **fields) -> Project:
    """Build a project owned by ``owner``."""
    return Project(id=ProjectId(uuid4()), name=name, owner_id=owner.id, **fields)


def days(n: int) -> timedelta:
    return timedelta(days=n)
