"""Configuration management for URL shortener."""

from typing import Optional
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration."""

    # Key-value store settings
    kv_rest_api_url: str = Field(
        ...,
        description="KV store endpoint (https:// REST API, redis(s):// or memory://)"
    )

    kv_rest_api_token: str = Field(
        ...,
        description="KV store access token"
    )

    kv_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for a single store request"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=8000,
        description="Port to listen on"
    )

    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("environment", "node_env"),
        description="Deployment mode; 'production' hides error stacks and uses https short URLs"
    )

    domain: Optional[str] = Field(
        default=None,
        description="Public domain used in short URLs (defaults to localhost:<port>)"
    )

    # Slug settings
    slug_length: int = Field(
        default=5,
        ge=1,
        le=255,
        description="Length of generated slugs"
    )

    secret_length: int = Field(
        default=10,
        ge=1,
        description="Length of per-record secret tokens"
    )

    max_slug_attempts: int = Field(
        default=10,
        ge=1,
        description="Maximum store lookups when generating a unique slug"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def public_domain(self) -> str:
        return self.domain or f"localhost:{self.port}"

    def safe_dump(self) -> dict:
        """Dump settings for logging, with the store token masked."""
        data = self.model_dump()
        data["kv_rest_api_token"] = "***"
        return data


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
