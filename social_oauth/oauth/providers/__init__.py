"""OAuth providers module."""
from .base import AUTH_PARAMS, OAuthProvider, ProviderDescriptor
from .facebook import FacebookOAuthProvider
from .github import GitHubOAuthProvider
from .google import GoogleOAuthProvider
from .linkedin import LinkedInOAuthProvider

__all__ = [
    "AUTH_PARAMS",
    "OAuthProvider",
    "ProviderDescriptor",
    "FacebookOAuthProvider",
    "GitHubOAuthProvider",
    "GoogleOAuthProvider",
    "LinkedInOAuthProvider",
]
