from __future__ import annotations

import os
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "SocialOAuth"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # text | json

    # HTTP transport used for token exchange and profile fetches
    OAUTH_HTTP_TIMEOUT: float = 10.0
    # Random bytes in the generated state token (hex-encoded to twice this length)
    OAUTH_STATE_BYTES: int = 15
    # GitHub rejects API calls without a User-Agent
    OAUTH_USER_AGENT: str = "MyGitHubApp"
    # Callback URLs are built as {base}/auth/oauth/{provider}/callback
    OAUTH_REDIRECT_BASE_URL: str = "http://localhost:8000"

    FACEBOOK_CLIENT_ID: str | None = None
    FACEBOOK_CLIENT_SECRET: str | None = None
    GITHUB_CLIENT_ID: str | None = None
    GITHUB_CLIENT_SECRET: str | None = None
    GOOGLE_CLIENT_ID: str | None = None
    GOOGLE_CLIENT_SECRET: str | None = None
    LINKEDIN_CLIENT_ID: str | None = None
    LINKEDIN_CLIENT_SECRET: str | None = None

    @field_validator("OAUTH_HTTP_TIMEOUT")
    @classmethod
    def _positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("OAUTH_HTTP_TIMEOUT must be positive")
        return v

    @field_validator("OAUTH_STATE_BYTES")
    @classmethod
    def _positive_state_bytes(cls, v: int) -> int:
        if v < 1:
            raise ValueError("OAUTH_STATE_BYTES must be at least 1")
        return v

    @field_validator("OAUTH_REDIRECT_BASE_URL")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def provider_credentials(self, name: str) -> tuple[str | None, str | None]:
        """Return ``(client_id, client_secret)`` configured for provider *name*."""
        prefix = name.upper()
        return (
            getattr(self, f"{prefix}_CLIENT_ID", None),
            getattr(self, f"{prefix}_CLIENT_SECRET", None),
        )


class DevSettings(BaseAppSettings):
    ENV: str = "dev"


class TestSettings(BaseAppSettings):
    ENV: str = "test"
    OAUTH_HTTP_TIMEOUT: float = 2.0


class ProdSettings(BaseAppSettings):
    ENV: str = "prod"
    LOG_FORMAT: str = "json"


_ENV_TO_SETTINGS: dict[str, type[BaseAppSettings]] = {
    "dev": DevSettings,
    "development": DevSettings,
    "test": TestSettings,
    "testing": TestSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
}


@lru_cache
def get_settings() -> BaseAppSettings:
    env_name = os.getenv("APP_ENV") or os.getenv("ENV") or "dev"
    env = env_name.lower()
    settings_cls = _ENV_TO_SETTINGS.get(env, DevSettings)
    return settings_cls()


settings = get_settings()
