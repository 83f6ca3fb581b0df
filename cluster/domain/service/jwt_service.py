"""JWT session domain service."""

import asyncio

import logfire

from cluster.config import AuthSettings
from cluster.domain.error import UnauthenticatedError
from cluster.domain.model import User
from cluster.util.jwt import SigningKeyResolver, TokenPayload, verify_token

from .base import Service
from .user_service import UserService


class JWTService(Service):
    """Domain service mapping identity-provider sessions to local users."""

    def __init__(
        self,
        auth_settings: AuthSettings,
        key_resolver: SigningKeyResolver,
        user_service: UserService,
    ) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
            key_resolver: Source of session signing keys
            user_service: Used to look up the session's user
        """
        self.auth_settings = auth_settings
        self.key_resolver = key_resolver
        self.user_service = user_service

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a session token and extract its claims.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                key = self.key_resolver.get_signing_key(token)
                payload = verify_token(token, key, self.auth_settings)
                logfire.info("JWT token verified", external_id=payload.sub)
                return payload
            except Exception as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise

    async def authenticate(self, token: str) -> User:
        """Resolve the local user behind a session token.

        Key lookup may hit the network, so verification runs in a thread.

        Raises:
            JWTError: If token is invalid or expired
            UnauthenticatedError: If the provider user is not synced locally
        """
        payload = await asyncio.to_thread(self.verify_token, token)
        user = await self.user_service.get_by_external_id(payload.sub)
        if not user:
            logfire.warn("Session for unknown user", external_id=payload.sub)
            raise UnauthenticatedError(
                "User not found", code="AUTH_ERROR_USER_NOT_FOUND"
            )
        return user
