"""Application configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults for development.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========== Cache ==========
    cache_namespace: str = Field(
        default="cache",
        description="Namespace prefix reserved for cache keys in the persistent store",
    )

    # ========== Storage ==========
    storage_backend: Literal["memory", "redis"] = Field(
        default="memory",
        description="Persistent key-value store backing the cache",
    )
    upstash_redis_rest_url: str = Field(default="", description="Upstash Redis REST URL")
    upstash_redis_rest_token: str = Field(default="", description="Upstash Redis REST Token")
    storage_health_timeout: float = Field(default=5.0, gt=0, le=60)

    # ========== Operator access ==========
    admin_token: str = Field(
        default="",
        description="Token required by operator cache endpoints (empty disables the check)",
    )

    # ========== Application ==========
    app_name: str = "Luma Cache"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("cache_namespace")
    @classmethod
    def _validate_namespace(cls, v: str) -> str:
        if not v or ":" in v:
            raise ValueError("cache_namespace must be non-empty and must not contain ':'")
        return v

    # ========== Computed Properties ==========
    @computed_field
    @property
    def redis_available(self) -> bool:
        """Check if Redis credentials are configured."""
        return bool(self.upstash_redis_rest_url and self.upstash_redis_rest_token)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
