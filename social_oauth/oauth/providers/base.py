"""Shared OAuth 2.0 authorization code flow.

A provider is an ``OAuthConfig`` (credentials, redirect URL, scopes)
paired with a ``ProviderDescriptor`` (endpoints, default scopes and
request quirks). Subclasses supply the descriptor and may override the
request hooks where a provider needs something the descriptor cannot
express.
"""
from __future__ import annotations

import hashlib
import logging
from abc import abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal

from social_oauth.core.config import settings

from ..config import OAuthConfig, build_url, generate_token, project_config
from ..exceptions import OAuthProviderError, OAuthTokenError, OAuthUserInfoError
from ..http import OAuthHttpClient, get_default_http_client
from ..interface import OAuthServiceInterface
from ..result import OAuthResult

logger = logging.getLogger(__name__)

# Parameters sent to the authorization endpoint
AUTH_PARAMS = ("response_type", "client_id", "redirect_uri", "scope", "state")


@dataclass(frozen=True)
class ProviderDescriptor:
    """Fixed, provider-specific part of the OAuth flow."""

    name: str
    authorize_url: str
    token_url: str
    user_info_url: str
    default_scopes: tuple[str, ...]
    # Added to get_config() after response_type
    config_extras: Mapping[str, str] = field(default_factory=dict)
    # Config keys sent (with the code) to the token endpoint
    token_params: tuple[str, ...] = ("client_id", "client_secret", "redirect_uri", "grant_type")
    token_headers: Mapping[str, str] = field(default_factory=dict)
    # "query" sends ?access_token=..., "bearer" sends an Authorization header
    user_auth: Literal["query", "bearer"] = "bearer"


class OAuthProvider(OAuthServiceInterface):
    """
    Base class for OAuth 2.0 providers.

    Implements the authorization code flow on top of an immutable
    ``OAuthConfig``. ``with_*`` methods return a new provider sharing the
    same HTTP client; the receiver is left untouched.
    """

    descriptor: ClassVar[ProviderDescriptor]

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_url: str = "",
        scopes: Iterable[str] = (),
        *,
        http: OAuthHttpClient | None = None,
        state_bytes: int | None = None,
    ):
        """
        Initialize OAuth provider.

        Args:
            client_id: OAuth client ID from provider
            client_secret: OAuth client secret from provider
            redirect_url: Callback URL for OAuth flow
            scopes: Requested scopes; the provider defaults are used when empty
            http: HTTP client to use, the shared default client when omitted
            state_bytes: Random bytes in the state token, defaults to OAUTH_STATE_BYTES
        """
        config = OAuthConfig(client_id, client_secret, redirect_url, tuple(scopes))
        self._bind(config, http, state_bytes)

    @classmethod
    def from_config(
        cls,
        config: OAuthConfig,
        *,
        http: OAuthHttpClient | None = None,
        state_bytes: int | None = None,
    ) -> OAuthProvider:
        provider = cls.__new__(cls)
        provider._bind(config, http, state_bytes)
        return provider

    def _bind(self, config: OAuthConfig, http: OAuthHttpClient | None, state_bytes: int | None) -> None:
        if not config.scopes:
            config = config.with_scopes(self.descriptor.default_scopes)
        self._config = config
        # None means the shared default client, resolved on first network call
        self._http = http
        self._state_bytes = state_bytes or settings.OAUTH_STATE_BYTES

    def _evolve(self, config: OAuthConfig) -> OAuthProvider:
        clone = type(self).__new__(type(self))
        clone._config = config
        clone._http = self._http
        clone._state_bytes = self._state_bytes
        return clone

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(client_id={self._config.client_id!r}, "
            f"redirect_url={self._config.redirect_url!r}, scopes={self._config.scopes!r})"
        )

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def config(self) -> OAuthConfig:
        return self._config

    @property
    def http(self) -> OAuthHttpClient:
        if self._http is None:
            return get_default_http_client()
        return self._http

    # Configuration surface, delegated to the wrapped OAuthConfig

    def get_client_id(self) -> str:
        return self._config.get_client_id()

    def get_client_secret(self) -> str:
        return self._config.get_client_secret()

    def get_redirect_url(self) -> str:
        return self._config.get_redirect_url()

    def get_scopes(self) -> tuple[str, ...]:
        return self._config.get_scopes()

    def get_scope(self, key: int | str) -> str:
        return self._config.get_scope(key)

    def get_scopes_string(self, separator: str = " ") -> str:
        return self._config.get_scopes_string(separator)

    def with_client_id(self, client_id: str) -> OAuthProvider:
        return self._evolve(self._config.with_client_id(client_id))

    def with_client_secret(self, client_secret: str) -> OAuthProvider:
        return self._evolve(self._config.with_client_secret(client_secret))

    def with_redirect_url(self, redirect_url: str) -> OAuthProvider:
        return self._evolve(self._config.with_redirect_url(redirect_url))

    def with_scopes(self, scopes: Iterable[str]) -> OAuthProvider:
        return self._evolve(self._config.with_scopes(scopes))

    def only_config(self, keys: str | Iterable[str]) -> dict[str, Any]:
        return project_config(self.get_config(), keys, keep=True)

    def without_config(self, keys: str | Iterable[str]) -> dict[str, Any]:
        return project_config(self.get_config(), keys, keep=False)

    build_url = staticmethod(build_url)
    generate_token = staticmethod(generate_token)

    # OAuthServiceInterface

    def get_config(self) -> dict[str, Any]:
        return {
            "client_id": self.get_client_id(),
            "client_secret": self.get_client_secret(),
            "redirect_uri": self.get_redirect_url(),
            "scope": self.get_scopes_string(),
            "state": self.generate_token(self._state_bytes),
            "response_type": "code",
            **self.descriptor.config_extras,
        }

    def get_auth_url(self) -> str:
        return self.build_url(self.descriptor.authorize_url, self.only_config(AUTH_PARAMS))

    def get_access_token(self, code: str) -> str:
        return self.exchange_code(code).unwrap_or("")

    def get_user(self, token: str) -> dict[str, Any] | None:
        return self.fetch_user(token).unwrap_or(None)

    # Typed variants

    def exchange_code(self, code: str) -> OAuthResult[str]:
        """
        Exchange authorization code for access token.

        Args:
            code: Authorization code from OAuth callback

        Returns:
            Result holding the access token, or an OAuthTokenError
        """
        params = {"code": code, **self.only_config(self.descriptor.token_params)}

        # Log sanitized exchange metadata (no secrets)
        code_hash = hashlib.sha256(code.encode()).hexdigest()[:12]
        logger.info(
            "Token exchange attempt | provider=%s client_id=%s code_hash=%s",
            self.name,
            self.get_client_id(),
            code_hash,
        )

        try:
            data = self.http.post_form(self.descriptor.token_url, data=params, headers=self.token_headers())
        except OAuthProviderError as e:
            logger.warning("Token exchange failed | provider=%s code_hash=%s error=%s", self.name, code_hash, e)
            return OAuthResult.failure(
                OAuthTokenError(f"Token exchange failed: {e}", provider=self.name, status_code=e.status_code)
            )

        access_token = data.get("access_token") if isinstance(data, dict) else None
        if not access_token:
            logger.warning("Token exchange returned no access token | provider=%s code_hash=%s", self.name, code_hash)
            return OAuthResult.failure(OAuthTokenError("No access token in response", provider=self.name))

        logger.info("Token exchange SUCCESS | provider=%s code_hash=%s", self.name, code_hash)
        return OAuthResult.success(str(access_token))

    def fetch_user(self, token: str) -> OAuthResult[dict[str, Any]]:
        """
        Fetch user information using access token.

        Args:
            token: OAuth access token

        Returns:
            Result holding the decoded profile, or an OAuthUserInfoError
        """
        params, headers = self.user_request(token)
        try:
            data = self.http.get_json(self.descriptor.user_info_url, params=params, headers=headers)
        except OAuthProviderError as e:
            logger.warning("User info fetch failed | provider=%s error=%s", self.name, e)
            return OAuthResult.failure(
                OAuthUserInfoError(f"User info fetch failed: {e}", provider=self.name, status_code=e.status_code)
            )

        if not isinstance(data, dict):
            logger.warning("User info response is not an object | provider=%s", self.name)
            return OAuthResult.failure(OAuthUserInfoError("Unexpected user info payload", provider=self.name))
        return OAuthResult.success(data)

    # Request hooks

    def token_headers(self) -> dict[str, str]:
        return dict(self.descriptor.token_headers)

    def user_request(self, token: str) -> tuple[dict[str, str] | None, dict[str, str]]:
        """Return ``(query_params, headers)`` for the user info call."""
        if self.descriptor.user_auth == "query":
            return {"access_token": token}, {}
        return None, {"Authorization": f"Bearer {token}"}

    @abstractmethod
    def extract_user_data(self, user_info: Mapping[str, Any]) -> dict[str, Any]:
        """
        Extract standardized user data from provider response.

        Args:
            user_info: Raw user info from provider

        Returns:
            Standardized user data with keys: id, email, name, picture
        """
