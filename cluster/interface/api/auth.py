"""Request authentication helpers for routes."""

from fastapi import HTTPException, status

from cluster.domain.service import JWTService
from cluster.util.jwt import JWTError

# Cookie the identity provider's frontend SDK stores the session token in
SESSION_COOKIE = "__session"


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def require_user_id(
    jwt_service: JWTService,
    session_token: str | None,
    authorization: str | None = None,
) -> str:
    """Resolve the caller's user ID from the session cookie or bearer header.

    Raises:
        HTTPException: 401 if no token is present or it does not verify
        UnauthenticatedError: If the session user is not synced locally
    """
    token = bearer_token(authorization) or session_token
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    try:
        user = await jwt_service.authenticate(token)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    return str(user.id)
