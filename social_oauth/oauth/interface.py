"""Capability contract shared by every OAuth provider."""
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from .exceptions import OAuthTokenError, OAuthUserInfoError
from .result import OAuthResult


class OAuthServiceInterface(ABC):
    """
    What callers may rely on from any provider.

    Code that drives a login flow should depend on this type only,
    never on a concrete provider class. Implementations must supply the
    four abstract methods; the typed ``exchange_code``/``fetch_user``
    calls default to wrapping the sentinel results of those.
    """

    @abstractmethod
    def get_config(self) -> dict[str, Any]:
        """Full parameter mapping, including a freshly generated state."""

    @abstractmethod
    def get_auth_url(self) -> str:
        """URL to redirect the user to for consent."""

    @abstractmethod
    def get_access_token(self, code: str) -> str:
        """
        Exchange an authorization code for an access token.

        Returns:
            The access token, or an empty string if the exchange failed
        """

    @abstractmethod
    def get_user(self, token: str) -> dict[str, Any] | None:
        """
        Fetch the profile of the user owning *token*.

        Returns:
            Decoded provider response, or None if the fetch failed
        """

    @property
    def name(self) -> str:
        return type(self).__name__

    def exchange_code(self, code: str) -> OAuthResult[str]:
        """Like ``get_access_token`` but reports failure as an error."""
        token = self.get_access_token(code)
        if not token:
            return OAuthResult.failure(OAuthTokenError("No access token in response", provider=self.name))
        return OAuthResult.success(token)

    def fetch_user(self, token: str) -> OAuthResult[dict[str, Any]]:
        """Like ``get_user`` but reports failure as an error."""
        user_info = self.get_user(token)
        if user_info is None:
            return OAuthResult.failure(OAuthUserInfoError("User info fetch failed", provider=self.name))
        return OAuthResult.success(user_info)

    def extract_user_data(self, user_info: Mapping[str, Any]) -> dict[str, Any]:
        """Standardized profile; the raw payload unless a provider knows better."""
        return dict(user_info)
