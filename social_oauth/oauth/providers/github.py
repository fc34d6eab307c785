"""GitHub OAuth App implementation."""
from collections.abc import Mapping
from typing import Any

from social_oauth.core.config import settings

from .base import OAuthProvider, ProviderDescriptor


class GitHubOAuthProvider(OAuthProvider):
    """GitHub OAuth 2.0 implementation."""

    descriptor = ProviderDescriptor(
        name="github",
        authorize_url="https://github.com/login/oauth/authorize",
        token_url="https://github.com/login/oauth/access_token",
        user_info_url="https://api.github.com/user",
        default_scopes=("user",),
        # GitHub takes no grant_type but accepts state on the token request
        token_params=("client_id", "client_secret", "redirect_uri", "state"),
        # Without this the token endpoint answers form-encoded
        token_headers={"Accept": "application/json"},
        user_auth="bearer",
    )

    def user_request(self, token: str) -> tuple[dict[str, str] | None, dict[str, str]]:
        params, headers = super().user_request(token)
        headers["User-Agent"] = settings.OAUTH_USER_AGENT
        return params, headers

    def extract_user_data(self, user_info: Mapping[str, Any]) -> dict[str, Any]:
        """
        Extract user data from GitHub ``/user`` response.

        ``email`` is null unless the user made it public, and ``name`` is
        optional, so the login is used in its place.
        """
        return {
            "id": str(user_info.get("id", "")),
            "email": user_info.get("email") or "",
            "name": user_info.get("name") or user_info.get("login", ""),
            "picture": user_info.get("avatar_url", ""),
        }
