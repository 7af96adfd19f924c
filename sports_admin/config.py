"""
Typed settings for the sports admin client.

Uses Pydantic Settings to load configuration from environment variables
with validation and type safety. A root .env file is honoured for local
development; in containers the variables are passed directly.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .validate_env import validate_env


class ApiClientConfig(BaseModel):
    base_url: str = Field(default="http://localhost:9000")
    request_timeout_seconds: float = 15.0
    user_agent: str = "sports-admin-client/1.0"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    API_BASE_URL is a top-level override for the nested client config so
    deployments don't need double-underscore syntax.
    """
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[1] / ".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="allow",
    )

    environment: str = Field("development", alias="ENVIRONMENT")
    log_level: str | None = Field(None, alias="LOG_LEVEL")
    api_key: str | None = Field(None, alias="API_KEY")
    api_base_url: str | None = Field(None, alias="API_BASE_URL")
    client_config: ApiClientConfig = Field(default_factory=ApiClientConfig)

    @model_validator(mode="after")
    def _apply_client_overrides(self) -> Settings:
        if self.api_base_url:
            self.client_config.base_url = self.api_base_url.rstrip("/")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Settings are cached to avoid re-parsing environment variables
    on every access.
    """
    validate_env()
    return Settings()


# Global settings instance - import this in other modules
settings = get_settings()
