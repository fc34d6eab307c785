"""OAuth 2.0 client module.

Builds authorization URLs, exchanges authorization codes for access
tokens and fetches profile data from third-party identity providers
behind one interface.

Providers:
- Facebook
- GitHub
- Google (OAuth 2.0 + OpenID Connect)
- LinkedIn
"""
from .config import OAuthConfig, build_url, generate_token
from .exceptions import (
    OAuthError,
    OAuthProviderError,
    OAuthProviderNotConfiguredError,
    OAuthTokenError,
    OAuthUserInfoError,
    ScopeNotFoundError,
)
from .factory import PROVIDER_CLASSES, create_oauth_service, create_provider
from .http import OAuthHttpClient, close_default_http_client, get_default_http_client
from .interface import OAuthServiceInterface
from .providers import (
    FacebookOAuthProvider,
    GitHubOAuthProvider,
    GoogleOAuthProvider,
    LinkedInOAuthProvider,
    OAuthProvider,
    ProviderDescriptor,
)
from .result import OAuthResult
from .service import OAuthService

__all__ = [
    # Configuration
    "OAuthConfig",
    "build_url",
    "generate_token",
    # Exceptions
    "OAuthError",
    "OAuthProviderError",
    "OAuthProviderNotConfiguredError",
    "OAuthTokenError",
    "OAuthUserInfoError",
    "ScopeNotFoundError",
    # Contract
    "OAuthServiceInterface",
    "OAuthResult",
    "OAuthHttpClient",
    "close_default_http_client",
    "get_default_http_client",
    # Providers
    "OAuthProvider",
    "ProviderDescriptor",
    "FacebookOAuthProvider",
    "GitHubOAuthProvider",
    "GoogleOAuthProvider",
    "LinkedInOAuthProvider",
    # Service
    "OAuthService",
    # Factory
    "PROVIDER_CLASSES",
    "create_provider",
    "create_oauth_service",
]
