"""Identity provider infrastructure providers."""

from dishka import Scope, provide

from cluster.adapter.identity import IdentityWebhookVerifier
from cluster.config import AuthSettings
from cluster.util.di.base import ProviderBase
from cluster.util.jwt import JWKSKeyResolver, SigningKeyResolver


class IdentityProvider(ProviderBase):
    """Identity component base."""

    __mock_component__ = "identity"


class ProdIdentityProvider(IdentityProvider):
    """Production identity provider backed by the provider's JWKS."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_key_resolver(self, auth_settings: AuthSettings) -> SigningKeyResolver:
        """Provide session signing key resolver (keys are cached)."""
        return JWKSKeyResolver(
            jwks_url=auth_settings.jwks_url,
            cache_seconds=auth_settings.jwks_cache_seconds,
        )

    @provide(scope=Scope.APP)
    def get_webhook_verifier(
        self, auth_settings: AuthSettings
    ) -> IdentityWebhookVerifier:
        """Provide identity webhook signature verifier."""
        return IdentityWebhookVerifier(secret=auth_settings.webhook_secret)
