"""Facebook Login (Graph API v12.0) implementation."""
from collections.abc import Mapping
from typing import Any

from .base import OAuthProvider, ProviderDescriptor


class FacebookOAuthProvider(OAuthProvider):
    """Facebook OAuth 2.0 implementation."""

    descriptor = ProviderDescriptor(
        name="facebook",
        authorize_url="https://www.facebook.com/v12.0/dialog/oauth",
        token_url="https://graph.facebook.com/v12.0/oauth/access_token",
        user_info_url="https://graph.facebook.com/me?fields=id,name,email",
        default_scopes=("email",),
        config_extras={"grant_type": "authorization_code"},
        user_auth="query",
    )

    def extract_user_data(self, user_info: Mapping[str, Any]) -> dict[str, Any]:
        """
        Extract user data from Graph API ``/me`` response.

        Only ``id``, ``name`` and ``email`` are requested; ``email`` is
        missing when the user declined the email permission.
        """
        return {
            "id": str(user_info.get("id", "")),
            "email": user_info.get("email", ""),
            "name": user_info.get("name", ""),
            "picture": "",
        }
