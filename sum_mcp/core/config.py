"""
Core configuration module for the Sum MCP server.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the SUM_MCP_ prefix,
read once at startup and treated as read-only afterwards.

Pattern: Pydantic BaseSettings with an lru_cache singleton
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All fields use the SUM_MCP_ prefix for environment variables.
    Example: SUM_MCP_PORT=8080, SUM_MCP_API_KEY=secret
    """

    # =========================================================================
    # Service Configuration
    # =========================================================================
    service_name: str = Field(
        default="Sum.Mcp",
        description="Server name reported to clients and in logs",
    )
    service_version: str = Field(
        default="1.0.0",
        description="Server version reported by the initialize handshake",
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Bind address for the HTTP transport",
    )
    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port the HTTP transport listens on",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    cors_origins: str = Field(
        default="",
        description="Comma-separated CORS origins for non-development environments",
    )

    # =========================================================================
    # Auth Gate
    # SecretStr masks the value in logs/repr, use .get_secret_value() to access.
    # An empty key means open mode.
    # =========================================================================
    api_key: SecretStr = Field(
        default=SecretStr(""),
        description="API key required in the X-Api-Key header of HTTP calls",
    )

    # =========================================================================
    # Sliding Window Rate Limiting
    # =========================================================================
    rate_limit_permit_limit: int = Field(
        default=10,
        ge=1,
        description="Maximum admissions per partition within one window",
    )
    rate_limit_window_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Length of the sliding window in seconds",
    )
    rate_limit_segments_per_window: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Number of segments the window is divided into",
    )

    # =========================================================================
    # Tool Execution
    # =========================================================================
    tool_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=600.0,
        description="Maximum execution time of a single tool call",
    )

    # =========================================================================
    # Optional store handed to tools that ask for it
    # =========================================================================
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL; unset disables the tool store",
    )
    redis_connect_timeout_seconds: float = Field(
        default=2.0,
        gt=0,
        le=60.0,
        description="Connect timeout for the startup ping to the tool store",
    )

    model_config = {
        "env_prefix": "SUM_MCP_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    # =========================================================================
    # Field Validators
    # =========================================================================
    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate Redis URL format. Blank values disable the store."""
        if v is None or not v.strip():
            return None
        if not v.startswith(("redis://", "rediss://")):
            raise ValueError("Redis URL must start with redis:// or rediss://")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {v}")
        return level

    @property
    def auth_enabled(self) -> bool:
        """True when an API key is configured."""
        return bool(self.api_key.get_secret_value())


# =============================================================================
# Settings Singleton
# =============================================================================


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses functools.lru_cache to ensure only one Settings instance is created.
    Tests call ``get_settings.cache_clear()`` to pick up a patched environment.

    Returns:
        Settings: The application settings instance.
    """
    return Settings()
