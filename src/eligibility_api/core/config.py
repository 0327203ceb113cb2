"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        description="Async SQLAlchemy connection string (PostgreSQL via asyncpg)",
    )
    database_schema: str | None = Field(
        default=None,
        description="PostgreSQL schema for isolated environments (e.g., pr_42)",
    )

    @field_validator("database_schema")
    @classmethod
    def validate_database_schema(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not re.match(r"^[a-z_][a-z0-9_]{0,62}$", v):
            msg = "Invalid database_schema: must match ^[a-z_][a-z0-9_]{0,62}$"
            raise ValueError(msg)
        return v

    database_pool_size: int = Field(
        default=10,
        description="Persistent connections kept in the database pool",
        gt=0,
    )
    database_max_overflow: int = Field(
        default=5,
        description="Connections allowed above the pool size under load",
        ge=0,
    )
    database_echo: bool = Field(
        default=False,
        description="Log every SQL statement (debugging only)",
    )

    # Redis cache
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL backing the lookup and eligibility caches",
    )
    redis_timeout: float = Field(
        default=5.0,
        description="Redis socket connect/read timeout in seconds",
        gt=0,
    )

    # Eligibility rules
    eligibility_rules_enabled: bool = Field(
        default=True,
        description="When false every address is automatically eligible",
    )
    eligibility_min_confidence_score: float = Field(
        default=0.5,
        description="Minimum confidence score for an address to be eligible",
        ge=0.0,
        le=1.0,
    )
    eligibility_cache_duration: int = Field(
        default=3600,
        description="TTL in seconds for cached lookups and eligibility results",
        gt=0,
    )

    # Geocoding (Google Maps)
    google_maps_enabled: bool = Field(
        default=False,
        description="Resolve addresses with the Google Maps API instead of static fixtures",
    )
    google_maps_api_key: str | None = Field(
        default=None,
        description="Google Maps Geocoding API key",
    )
    google_maps_timeout: float = Field(
        default=10.0,
        description="Google Maps request timeout in seconds",
        gt=0,
    )

    # Static data files
    address_fixtures_path: str | None = Field(
        default=None,
        description="JSON/YAML file of address components used when Google Maps is disabled",
    )
    eligible_regions_path: str | None = Field(
        default=None,
        description="YAML file describing eligible state → county → city regions",
    )
    preloaded_addresses_path: str | None = Field(
        default=None,
        description="JSON/YAML file of curated addresses with embedded eligibility verdicts",
    )

    # API security
    api_security_enabled: bool = Field(
        default=True,
        description="Require an API-TOKEN header on non-public endpoints",
    )
    api_tokens: str = Field(
        default="00000-000-00000,11111-111-11111",
        description="Comma-separated list of accepted API tokens",
    )
    api_public_paths: str = Field(
        default="/api/v1/address,/docs,/redoc,/openapi.json",
        description="Comma-separated path prefixes that skip API token checks",
    )

    @property
    def api_token_list(self) -> list[str]:
        """Parse accepted API tokens into a list."""
        if not self.api_tokens.strip():
            return []
        return [t.strip() for t in self.api_tokens.split(",") if t.strip()]

    @property
    def api_public_path_list(self) -> list[str]:
        """Parse public path prefixes into a list."""
        if not self.api_public_paths.strip():
            return []
        return [p.strip() for p in self.api_public_paths.split(",") if p.strip()]

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )
    log_json: bool = Field(
        default=False,
        description="Emit every log record as JSON (for log shippers) instead of the text format",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins (must be explicitly configured)",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Environment
    environment: str = Field(
        default="production",
        description="Deployment environment name (e.g. production, dev, staging)",
    )

    # API
    api_v1_prefix: str = Field(
        default="/api/v1",
        description="API version prefix",
    )
    rate_limit_per_minute: int = Field(
        default=200,
        description="Maximum API requests per minute per IP address",
        gt=0,
    )


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()  # type: ignore[call-arg]
