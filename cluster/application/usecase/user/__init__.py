"""User use cases."""

from cluster.application.usecase.user.get_user import (
    GetUserRequest,
    GetUserResponse,
    GetUserUseCase,
    UserItem,
)
from cluster.application.usecase.user.list_users import (
    ListUsersRequest,
    ListUsersResponse,
    ListUsersUseCase,
)
from cluster.application.usecase.user.sync_identity import (
    SyncIdentityRequest,
    SyncIdentityResponse,
    SyncIdentityUseCase,
)

__all__ = [
    "GetUserRequest",
    "GetUserResponse",
    "GetUserUseCase",
    "ListUsersRequest",
    "ListUsersResponse",
    "ListUsersUseCase",
    "SyncIdentityRequest",
    "SyncIdentityResponse",
    "SyncIdentityUseCase",
    "UserItem",
]
