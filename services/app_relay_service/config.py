"""Configuration for App Relay Service.

Uses Pydantic settings for environment-based configuration. Every value the
router and relay need is injected through the DI container from an instance
of ``AppRelaySettings``.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_STATIC_DIR = Path(__file__).resolve().parent / "static"


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class AppRelaySettings(BaseSettings):
    """Configuration settings for App Relay Service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APP_RELAY_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Service identity
    SERVICE_NAME: str = "app-relay-service"

    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias=AliasChoices("ENVIRONMENT", "APP_RELAY_ENVIRONMENT"),
        description="Runtime environment for the service",
    )

    # HTTP server configuration
    HOST: str = Field(default="0.0.0.0", description="HTTP server host")
    PORT: int = Field(default=4110, description="HTTP server port")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # Routing
    ROUTE_PREFIX: str = Field(
        default="/api/app",
        description="Page root; the relay endpoints live directly beneath it",
    )

    # CORS
    ALLOWED_ORIGIN: str = Field(
        default="*",
        validation_alias=AliasChoices("APP_RELAY_ALLOWED_ORIGIN", "ALLOWED_ORIGIN"),
        description="Value of Access-Control-Allow-Origin on every response",
    )

    # Upstream targets
    CREATE_DIRECTORY_URL: str = Field(
        default="https://upstream.example.com/createDirectory.php",
        validation_alias=AliasChoices("APP_RELAY_CREATE_DIRECTORY_URL", "CREATE_DIRECTORY_URL"),
        description="Upstream endpoint receiving create-directory requests",
    )
    VERIFICATION_URL: str = Field(
        default="https://upstream.example.com/verification.php",
        validation_alias=AliasChoices("APP_RELAY_VERIFICATION_URL", "VERIFICATION_URL"),
        description="Upstream endpoint receiving verification requests",
    )

    # HTTP client configuration
    UPSTREAM_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="Upper bound on a single upstream request in seconds",
    )
    UPSTREAM_CONNECT_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Upstream connection timeout in seconds",
    )

    # Page
    STATIC_DIR: Path = Field(
        default=PACKAGE_STATIC_DIR,
        description="Directory containing index.html and inspection_guard.js",
    )
    INSPECTION_GUARD_ENABLED: bool = Field(
        default=True,
        description="Embed the cosmetic devtools blackout script in the page",
    )

    @field_validator("ROUTE_PREFIX")
    @classmethod
    def _normalize_route_prefix(cls, value: str) -> str:
        prefix = value.strip().rstrip("/")
        if not prefix.startswith("/"):
            raise ValueError("ROUTE_PREFIX must start with '/' and name at least one segment")
        return prefix

    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT


# Global settings instance
settings = AppRelaySettings()
