"""Immutable OAuth client configuration.

``OAuthConfig`` holds the credentials, redirect URL and scopes for one
OAuth client. Every ``with_*`` method returns a new instance; the
receiver is never modified.
"""
from __future__ import annotations

import secrets
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import urlencode

from .exceptions import ScopeNotFoundError

DEFAULT_TOKEN_LENGTH = 10


def _as_keys(keys: str | Iterable[str]) -> set[str]:
    if isinstance(keys, str):
        return {keys}
    return set(keys)


def project_config(config: Mapping[str, Any], keys: str | Iterable[str], *, keep: bool = True) -> dict[str, Any]:
    """
    Filter a config mapping by key.

    Args:
        config: Mapping to filter
        keys: Key or keys to match; unknown keys are ignored
        keep: Keep only matching keys when True, drop them when False

    Returns:
        New dict in the original key order
    """
    wanted = _as_keys(keys)
    return {key: value for key, value in config.items() if (key in wanted) == keep}


def build_url(base: str, params: Mapping[str, Any]) -> str:
    """Append *params* as a form-encoded query string to *base*."""
    return f"{base.strip('/')}?{urlencode(params)}"


def generate_token(length: int = DEFAULT_TOKEN_LENGTH) -> str:
    """Return ``length`` cryptographically random bytes as a hex string."""
    return secrets.token_hex(length)


@dataclass(frozen=True)
class OAuthConfig:
    """Client credentials, redirect URL and scopes for an OAuth client."""

    client_id: str
    client_secret: str = field(repr=False)
    redirect_url: str = ""
    scopes: tuple[str, ...] = ()

    def __post_init__(self):
        # Callers may hand in any iterable; keep an immutable copy
        object.__setattr__(self, "scopes", tuple(self.scopes))

    def get_config(self) -> dict[str, Any]:
        return {
            "client_id": self.get_client_id(),
            "client_secret": self.get_client_secret(),
            "redirect_uri": self.get_redirect_url(),
            "scope": self.get_scopes_string(),
            "state": self.generate_token(),
        }

    def get_client_id(self) -> str:
        return self.client_id

    def get_client_secret(self) -> str:
        return self.client_secret

    def get_redirect_url(self) -> str:
        return self.redirect_url

    def get_scopes(self) -> tuple[str, ...]:
        return self.scopes

    def get_scope(self, key: int | str) -> str:
        """
        Look up a single scope.

        Args:
            key: Position in the scope list, or the scope name itself

        Raises:
            ScopeNotFoundError: If no scope matches the key
        """
        if isinstance(key, int) and not isinstance(key, bool):
            if 0 <= key < len(self.scopes):
                return self.scopes[key]
        elif key in self.scopes:
            return key
        raise ScopeNotFoundError(key)

    def get_scopes_string(self, separator: str = " ") -> str:
        return separator.join(self.scopes)

    def with_client_id(self, client_id: str) -> OAuthConfig:
        return replace(self, client_id=client_id)

    def with_client_secret(self, client_secret: str) -> OAuthConfig:
        return replace(self, client_secret=client_secret)

    def with_redirect_url(self, redirect_url: str) -> OAuthConfig:
        return replace(self, redirect_url=redirect_url.strip("/"))

    def with_scopes(self, scopes: Iterable[str]) -> OAuthConfig:
        return replace(self, scopes=tuple(scopes))

    def only_config(self, keys: str | Iterable[str]) -> dict[str, Any]:
        return project_config(self.get_config(), keys, keep=True)

    def without_config(self, keys: str | Iterable[str]) -> dict[str, Any]:
        return project_config(self.get_config(), keys, keep=False)

    @staticmethod
    def build_url(base: str, params: Mapping[str, Any]) -> str:
        return build_url(base, params)

    @staticmethod
    def generate_token(length: int = DEFAULT_TOKEN_LENGTH) -> str:
        return generate_token(length)
