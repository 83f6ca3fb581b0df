"""Domain value objects for Cluster.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
import secrets
from enum import Enum

from pydantic import field_validator

from cluster.domain.value.common import RootValueObject

INVITATION_TOKEN_BYTES = 32

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_TOKEN_PATTERN = re.compile(r"^[0-9a-f]{64,}$")


class UserRole(str, Enum):
    """Role of a user, synced from the identity provider."""

    INVESTOR = "investor"
    PROJECT_OWNER = "project_owner"
    SUPER_ADMIN = "super_admin"
    TEAM_MEMBER = "team_member"

    @classmethod
    def from_provider(cls, value: str | None) -> "UserRole | None":
        """Map a role string from identity-provider metadata.

        Accepts both our own role names and the provider-side aliases
        (``cluster_owner``, ``cluster_god``). Unknown values map to None.
        """
        if not value:
            return None
        aliases = {
            "cluster_owner": cls.PROJECT_OWNER,
            "cluster_god": cls.SUPER_ADMIN,
        }
        if value in aliases:
            return aliases[value]
        try:
            return cls(value)
        except ValueError:
            return None


class ProjectStatus(str, Enum):
    """Lifecycle status of a project."""

    PLANNING = "planning"
    ACTIVE = "active"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    CANCELLED = "cancelled"


class InvitationStatus(str, Enum):
    """Status of an invitation.

    ``pending`` is the only non-terminal state.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class AccessLevel(str, Enum):
    """Access a user has to a project."""

    OWNER = "owner"
    INVESTOR = "investor"
    NONE = "none"


class EmailAddress(RootValueObject[str]):
    """Email address, stored trimmed and lowercased."""

    @field_validator("root", mode="before")
    @classmethod
    def normalize(cls, v: str) -> str:
        """Trim and lowercase before validation."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("root")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate a minimal ``local@domain.tld`` shape."""
        if len(v) > 254 or not _EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email format")
        return v

    def matches(self, other: str | None) -> bool:
        """Case-insensitive comparison against a raw address."""
        if not other:
            return False
        return self.root == other.strip().lower()


class InvitationToken(RootValueObject[str]):
    """Unguessable invitation token (hex encoded, 64 chars when generated)."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is lowercase hex of at least 64 characters."""
        if not _TOKEN_PATTERN.match(v):
            raise ValueError("Token must be at least 64 lowercase hex characters")
        return v

    @classmethod
    def generate(cls) -> "InvitationToken":
        """Create a fresh token from 32 cryptographically random bytes."""
        return cls(secrets.token_hex(INVITATION_TOKEN_BYTES))

    @property
    def preview(self) -> str:
        """Truncated form safe to put in logs."""
        return self.root[:8] + "..."
