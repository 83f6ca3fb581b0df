"""User aggregate root.

Users are mirrored from the external identity provider: the provider owns
sign-in, we keep the role and profile needed for authorization.
"""

from typing import Optional

from pydantic import Field

from cluster.domain.model.common import TimestampedModel
from cluster.domain.value import EmailAddress, UserId, UserRole


class User(TimestampedModel):
    """User mirrored from the identity provider."""

    id: UserId
    external_id: str = Field(min_length=1, max_length=255)  # Provider user ID
    role: UserRole = UserRole.PROJECT_OWNER
    email: Optional[EmailAddress] = None  # Verified primary email
    display_name: Optional[str] = Field(default=None, max_length=255)

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN

    @property
    def name(self) -> str:
        """Best human-readable label for emails and listings."""
        if self.display_name:
            return self.display_name
        if self.email:
            return self.email.root
        return self.external_id
