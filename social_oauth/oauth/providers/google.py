"""Google OAuth 2.0 / OpenID Connect implementation."""
from collections.abc import Mapping
from typing import Any

from .base import OAuthProvider, ProviderDescriptor


class GoogleOAuthProvider(OAuthProvider):
    """Google OAuth 2.0 / OpenID Connect implementation."""

    descriptor = ProviderDescriptor(
        name="google",
        authorize_url="https://accounts.google.com/o/oauth2/auth",
        token_url="https://www.googleapis.com/oauth2/v4/token",
        user_info_url="https://www.googleapis.com/oauth2/v3/userinfo",
        default_scopes=("openid", "profile", "email"),
        config_extras={"grant_type": "authorization_code"},
        user_auth="query",
    )

    def extract_user_data(self, user_info: Mapping[str, Any]) -> dict[str, Any]:
        """
        Extract user data from Google userinfo (v3) response.

        Expected fields:
        - sub: Stable account identifier
        - email: User's email address
        - name: Full name
        - picture: Profile picture URL
        - email_verified: Email verification status
        """
        return {
            "id": str(user_info.get("sub", "")),
            "email": user_info.get("email", ""),
            "name": user_info.get("name", ""),
            "picture": user_info.get("picture", ""),
            "email_verified": user_info.get("email_verified", False),
        }
