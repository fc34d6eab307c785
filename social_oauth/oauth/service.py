"""OAuth service for coordinating logins across providers.

Responsibilities:
- Keep the set of configured providers
- Run the code -> token -> profile flow with typed errors
"""
import logging
from typing import Any

from .exceptions import OAuthProviderNotConfiguredError
from .interface import OAuthServiceInterface

logger = logging.getLogger(__name__)


class OAuthService:
    """
    Registry of OAuth providers keyed by name.

    Unlike the providers' ``get_access_token``/``get_user``, which fall
    back to empty values, ``authenticate_with_code`` raises on failure.
    """

    def __init__(self):
        self._providers: dict[str, OAuthServiceInterface] = {}

    def register_provider(self, name: str, provider: OAuthServiceInterface) -> None:
        """
        Register an OAuth provider.

        Args:
            name: Provider identifier (e.g., "google")
            provider: Any object implementing OAuthServiceInterface
        """
        self._providers[name] = provider
        logger.info("Registered OAuth provider: %s", name)

    def get_provider(self, name: str) -> OAuthServiceInterface:
        """
        Get registered OAuth provider.

        Raises:
            OAuthProviderNotConfiguredError: If provider not registered
        """
        if name not in self._providers:
            raise OAuthProviderNotConfiguredError(f"OAuth provider '{name}' not registered")
        return self._providers[name]

    @property
    def providers(self) -> list[str]:
        return list(self._providers)

    def get_auth_url(self, provider_name: str) -> str:
        return self.get_provider(provider_name).get_auth_url()

    def authenticate_with_code(self, provider_name: str, code: str) -> dict[str, Any]:
        """
        Authenticate user with OAuth authorization code.

        Complete OAuth flow:
        1. Exchange code for access token
        2. Fetch user info from provider
        3. Normalize the profile

        Args:
            provider_name: OAuth provider identifier
            code: Authorization code from OAuth callback

        Returns:
            access_token, the raw ``user_info`` and the normalized ``user``

        Raises:
            OAuthTokenError: If the code could not be exchanged
            OAuthUserInfoError: If the profile could not be fetched
        """
        provider = self.get_provider(provider_name)

        access_token = provider.exchange_code(code).unwrap()
        user_info = provider.fetch_user(access_token).unwrap()
        user = provider.extract_user_data(user_info)

        logger.info("User authenticated via %s", provider_name)

        return {"access_token": access_token, "user_info": user_info, "user": user}
