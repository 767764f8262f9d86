"""Configuration Management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="DATALIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Error reporting
    error_mode: Literal["alert", "raise"] = Field(
        default="alert", description="How severity-0 messages surface"
    )

    # Bindings
    strict_parents: bool = Field(
        default=False, description="Fail when a parent_template does not resolve"
    )

    # Transport
    request_timeout: float = Field(default=5.0, gt=0, description="Request timeout (seconds)")
    request_method: Literal["GET", "POST"] = Field(default="GET", description="Data request method")
    cache_requests: bool = Field(default=False, description="Allow HTTP caching of data requests")
    breaker_fail_max: int = Field(default=5, gt=0, description="Failures before breaker opens")
    breaker_reset_timeout: int = Field(default=30, gt=0, description="Breaker reset timeout (seconds)")

    # Templates
    template_cache_size: int = Field(default=16, gt=0, description="Template bundles kept in cache")
    template_cache_ttl: int = Field(default=3600, gt=0, description="Template bundle TTL (seconds)")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
