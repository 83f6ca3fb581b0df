"""Session token utilities.

Sessions are issued by the identity provider as signed JWTs. The public
keys are published as a JWKS document and fetched with ``PyJWKClient``.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

import jwt
from jwt import PyJWKClient
from pydantic import BaseModel, ValidationError

from cluster.config import AuthSettings


class TokenPayload(BaseModel):
    """Session token claims."""

    sub: str  # Identity-provider user ID
    exp: datetime
    sid: str | None = None
    azp: str | None = None


class JWTError(Exception):
    """JWT-related error."""

    pass


class SigningKeyResolver(ABC):
    """Finds the public key a session token was signed with."""

    @abstractmethod
    def get_signing_key(self, token: str) -> Any:
        """Return the verification key for ``token``.

        Raises:
            JWTError: If no key can be found
        """


class JWKSKeyResolver(SigningKeyResolver):
    """Resolves keys from the identity provider's JWKS endpoint."""

    def __init__(self, jwks_url: str | None, cache_seconds: int = 300) -> None:
        self.client = (
            PyJWKClient(jwks_url, cache_keys=True, lifespan=cache_seconds)
            if jwks_url
            else None
        )

    def get_signing_key(self, token: str) -> Any:
        if self.client is None:
            raise JWTError("Session verification is not configured")
        try:
            return self.client.get_signing_key_from_jwt(token).key
        except jwt.PyJWTError as e:
            raise JWTError(f"Signing key unavailable: {e}")


def verify_token(token: str, key: Any, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a session token.

    Args:
        token: JWT to verify
        key: Public key resolved for the token
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid, expired or issued for another party
    """
    try:
        payload = jwt.decode(
            token,
            key,
            algorithms=settings.jwt_algorithms,
            issuer=settings.issuer,
            leeway=settings.clock_skew_seconds,
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except (jwt.InvalidTokenError, ValueError):
        raise JWTError("Invalid token")

    if settings.authorized_parties and payload.get("azp") not in (
        settings.authorized_parties
    ):
        raise JWTError("Token was issued for another party")

    try:
        return TokenPayload(**payload)
    except ValidationError:
        raise JWTError("Invalid token")
