"""OAuth client exceptions."""


class OAuthError(Exception):
    """Base class for every error raised by the OAuth client."""


class ScopeNotFoundError(OAuthError, KeyError):
    """Raised when a scope lookup key is not present in the configuration."""

    def __init__(self, key):
        self.key = key
        super().__init__(f"Scope {key!r} not found")

    def __str__(self) -> str:
        # KeyError would repr() the whole message
        return self.args[0]


class OAuthProviderNotConfiguredError(OAuthError, ValueError):
    """Raised when an unknown or unregistered provider is requested."""


class OAuthProviderError(OAuthError):
    """Raised when OAuth provider communication fails."""

    def __init__(self, message: str, provider: str | None = None, status_code: int | None = None):
        self.provider = provider
        self.status_code = status_code
        super().__init__(f"{provider}: {message}" if provider else message)


class OAuthTokenError(OAuthProviderError):
    """Raised when token exchange fails."""


class OAuthUserInfoError(OAuthProviderError):
    """Raised when fetching user info fails."""
