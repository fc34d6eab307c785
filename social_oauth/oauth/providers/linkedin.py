"""LinkedIn (v2 API, lite profile) implementation."""
from collections.abc import Mapping
from typing import Any

from .base import OAuthProvider, ProviderDescriptor


def _localized(field: Any) -> str:
    """Pick the preferred-locale value out of a LinkedIn MultiLocaleString."""
    if not isinstance(field, Mapping):
        return ""
    localized = field.get("localized") or {}
    preferred = field.get("preferredLocale") or {}
    key = f"{preferred.get('language', '')}_{preferred.get('country', '')}"
    if key in localized:
        return localized[key]
    return next(iter(localized.values()), "")


class LinkedInOAuthProvider(OAuthProvider):
    """LinkedIn OAuth 2.0 implementation."""

    descriptor = ProviderDescriptor(
        name="linkedin",
        authorize_url="https://www.linkedin.com/oauth/v2/authorization",
        token_url="https://www.linkedin.com/oauth/v2/accessToken",
        user_info_url=(
            "https://api.linkedin.com/v2/me"
            "?projection=(id,firstName,lastName,profilePicture(displayImage~:playableStreams))"
        ),
        default_scopes=("r_liteprofile", "r_emailaddress"),
        config_extras={"grant_type": "authorization_code"},
        user_auth="bearer",
    )

    def extract_user_data(self, user_info: Mapping[str, Any]) -> dict[str, Any]:
        """
        Extract user data from the projected ``/v2/me`` response.

        The lite profile carries no email address; it lives behind a
        separate endpoint, so ``email`` is always empty here.
        """
        first = _localized(user_info.get("firstName"))
        last = _localized(user_info.get("lastName"))

        picture = ""
        elements = (user_info.get("profilePicture") or {}).get("displayImage~", {}).get("elements") or []
        if elements:
            # Streams are ordered smallest first
            identifiers = elements[-1].get("identifiers") or []
            if identifiers:
                picture = identifiers[0].get("identifier", "")

        return {
            "id": str(user_info.get("id", "")),
            "email": "",
            "name": " ".join(part for part in (first, last) if part),
            "picture": picture,
        }
