"""Synchronous HTTP transport for OAuth provider calls."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

import httpx

from social_oauth.core.config import settings

from .exceptions import OAuthProviderError

logger = logging.getLogger(__name__)


class OAuthHttpClient:
    """
    Thin wrapper over ``httpx.Client`` that returns decoded JSON.

    Non-2xx responses, transport failures and undecodable bodies are all
    raised as ``OAuthProviderError``. One instance may be shared by any
    number of providers and reused across sequential calls.
    """

    def __init__(self, client: httpx.Client | None = None, timeout: float | None = None):
        """
        Initialize HTTP client.

        Args:
            client: Preconfigured httpx client (tests inject a MockTransport here)
            timeout: Request timeout in seconds, defaults to OAUTH_HTTP_TIMEOUT
        """
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout or settings.OAUTH_HTTP_TIMEOUT)

    def get_json(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """GET *url* with *params* added to any query it already carries."""
        if params:
            # Passing params= to httpx replaces an existing query on 0.28+
            url = str(httpx.URL(url).copy_merge_params(params))
        return self._send("GET", url, headers=headers)

    def post_form(
        self,
        url: str,
        data: Mapping[str, Any],
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return self._send("POST", url, data=data, headers=headers)

    def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "OAuth provider returned error | method=%s url=%s status=%s",
                method,
                url.split("?", 1)[0],
                e.response.status_code,
            )
            raise OAuthProviderError(
                f"HTTP {e.response.status_code} from provider",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.warning("OAuth provider request failed | method=%s error=%s", method, e)
            raise OAuthProviderError("Failed to connect to OAuth provider") from e

        try:
            return response.json()
        except ValueError as e:
            logger.warning("OAuth provider sent invalid JSON | method=%s status=%s", method, response.status_code)
            raise OAuthProviderError(
                "Invalid JSON in provider response",
                status_code=response.status_code,
            ) from e

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> OAuthHttpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@lru_cache
def get_default_http_client() -> OAuthHttpClient:
    """Process-wide client used by providers built without ``http=``."""
    return OAuthHttpClient()


def close_default_http_client() -> None:
    """Close the shared default client; the next call builds a fresh one."""
    if get_default_http_client.cache_info().currsize:
        get_default_http_client().close()
    get_default_http_client.cache_clear()
