"""Application configuration management."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.constants import (
    CLIENT_IDENTIFIER,
    DEFAULT_ANALYSIS_DAYS,
    DEFAULT_RECOMMENDATION_LIMIT,
    DEFAULT_SUGGESTION_LIMIT,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = "eco-lens-search-analytics"
    app_env: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # -------------------------------------------------------------------------
    # Search Analytics API
    # -------------------------------------------------------------------------
    api_base_url: str = "https://eco-lens-8bn1.onrender.com/api"
    search_route_prefix: str = "/search"
    request_timeout: float = 30.0
    client_identifier: str = CLIENT_IDENTIFIER

    @field_validator("api_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @property
    def search_api_url(self) -> str:
        """Base URL for all search analytics routes."""
        return f"{self.api_base_url}{self.search_route_prefix}"

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------
    # Fixed bearer token for scripts; the app reads tokens from storage instead
    access_token: str = ""

    # -------------------------------------------------------------------------
    # Redis (token storage)
    # -------------------------------------------------------------------------
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: str = ""
    redis_db: int = 0

    @property
    def redis_url(self) -> str:
        """Construct Redis connection URL."""
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

    # -------------------------------------------------------------------------
    # Analytics Defaults
    # -------------------------------------------------------------------------
    default_analysis_days: int = DEFAULT_ANALYSIS_DAYS
    default_recommendation_limit: int = DEFAULT_RECOMMENDATION_LIMIT
    default_suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
