"""Multi-provider OAuth 2.0 client."""
from social_oauth.core.logger import init_logging
from social_oauth.oauth import (
    FacebookOAuthProvider,
    GitHubOAuthProvider,
    GoogleOAuthProvider,
    LinkedInOAuthProvider,
    OAuthConfig,
    OAuthService,
    OAuthServiceInterface,
    create_oauth_service,
    create_provider,
)

__version__ = "0.1.0"

__all__ = [
    "FacebookOAuthProvider",
    "GitHubOAuthProvider",
    "GoogleOAuthProvider",
    "LinkedInOAuthProvider",
    "OAuthConfig",
    "OAuthService",
    "OAuthServiceInterface",
    "create_oauth_service",
    "create_provider",
    "init_logging",
]
