"""Domain layer errors.

Every domain error carries a machine-readable ``code`` (e.g.
``PENDING_INVITATION_EXISTS``) and belongs to one ``ErrorCategory``. The
interface layer picks the HTTP status from the category; the domain never
knows about HTTP.
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """Coarse classification of domain failures."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    UNAUTHENTICATED = "unauthenticated"
    CONFLICT = "conflict"
    STATE_INVALID = "state_invalid"
    SERVER = "server"


class DomainError(Exception):
    """Base domain error."""

    category: ErrorCategory = ErrorCategory.SERVER
    default_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str | None = None, code: str | None = None):
        self.code = code or self.default_code
        self.message = message or self.code
        super().__init__(self.message)


class ValidationError(DomainError):
    """Malformed or out-of-range input."""

    category = ErrorCategory.VALIDATION
    default_code = "VALIDATION_ERROR"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    category = ErrorCategory.NOT_FOUND
    default_code = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str, code: str | None = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            f"{resource} not found: {identifier}",
            code=code or f"{_screaming(resource)}_NOT_FOUND",
        )


class ForbiddenError(DomainError):
    """Authenticated, but not allowed to perform the operation."""

    category = ErrorCategory.FORBIDDEN
    default_code = "FORBIDDEN"


class UnauthenticatedError(DomainError):
    """No usable identity attached to the request."""

    category = ErrorCategory.UNAUTHENTICATED
    default_code = "AUTH_ERROR_USER_NOT_FOUND"


class ConflictError(DomainError):
    """Operation clashes with existing state (duplicates, already accepted)."""

    category = ErrorCategory.CONFLICT
    default_code = "CONFLICT"


class StateInvalidError(DomainError):
    """Entity is in a state that does not allow the operation."""

    category = ErrorCategory.STATE_INVALID
    default_code = "STATE_INVALID"


def _screaming(resource: str) -> str:
    return resource.strip().upper().replace(" ", "_")
