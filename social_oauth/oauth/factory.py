"""Factory functions for creating configured OAuth providers and services."""
import logging
from collections.abc import Iterable

from social_oauth.core.config import BaseAppSettings, get_settings

from .exceptions import OAuthProviderNotConfiguredError
from .http import OAuthHttpClient
from .providers import (
    FacebookOAuthProvider,
    GitHubOAuthProvider,
    GoogleOAuthProvider,
    LinkedInOAuthProvider,
    OAuthProvider,
)
from .service import OAuthService

logger = logging.getLogger(__name__)

PROVIDER_CLASSES: dict[str, type[OAuthProvider]] = {
    "facebook": FacebookOAuthProvider,
    "github": GitHubOAuthProvider,
    "google": GoogleOAuthProvider,
    "linkedin": LinkedInOAuthProvider,
}


def create_provider(
    name: str,
    client_id: str,
    client_secret: str,
    redirect_url: str = "",
    scopes: Iterable[str] = (),
    http: OAuthHttpClient | None = None,
) -> OAuthProvider:
    """
    Build a provider by name.

    Raises:
        OAuthProviderNotConfiguredError: If *name* is not a known provider
    """
    try:
        provider_cls = PROVIDER_CLASSES[name.lower()]
    except KeyError:
        raise OAuthProviderNotConfiguredError(f"Unknown OAuth provider '{name}'") from None
    return provider_cls(client_id, client_secret, redirect_url, scopes, http=http)


def create_oauth_service(
    settings: BaseAppSettings | None = None,
    http: OAuthHttpClient | None = None,
) -> OAuthService:
    """
    Factory function to create configured OAuth service.

    Registers every provider whose client ID and secret are both set.
    All registered providers share one HTTP client, the process-wide
    default unless *http* is given.

    Args:
        settings: Settings to read credentials from, defaults to get_settings()
        http: Shared HTTP client, owned and closed by the caller

    Returns:
        Configured OAuthService instance
    """
    settings = settings or get_settings()
    service = OAuthService()

    for name, provider_cls in PROVIDER_CLASSES.items():
        client_id, client_secret = settings.provider_credentials(name)
        if not (client_id and client_secret):
            logger.warning("%s OAuth not configured (missing client ID/secret)", name)
            continue
        provider = provider_cls(
            client_id=client_id,
            client_secret=client_secret,
            redirect_url=f"{settings.OAUTH_REDIRECT_BASE_URL}/auth/oauth/{name}/callback",
            http=http,
            state_bytes=settings.OAUTH_STATE_BYTES,
        )
        service.register_provider(name, provider)
        logger.info("%s OAuth provider enabled", name)

    return service
