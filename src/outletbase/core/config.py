"""Configuration management for OutletBase.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at application
startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OUTLETBASE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "OutletBase"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"
    external_url: str = "http://localhost:3000"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./ob_data/outletbase.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # SQLite Pragmas
    db_sqlite_busy_timeout: int = 5000  # 5 seconds
    db_sqlite_foreign_keys: bool = True

    # Auth Settings (tokens are issued by the external auth provider)
    secret_key: str = Field(
        default="change-me-in-production-use-openssl-rand-hex-32",
        description="Shared secret used to verify bearer tokens",
    )
    auth_issuer: str = "outletbase"
    auth_algorithm: Literal["HS256", "HS384", "HS512"] = "HS256"
    access_token_expire_minutes: int = 60

    # CORS Settings
    cors_origins: list[str] = Field(default=["http://localhost:3000", "http://localhost:8000"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(default=["*"])
    cors_allow_headers: list[str] = Field(default=["*"])

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Invitation Settings
    invitation_expire_days: int = 7
    invitation_token_length: int = 32
    invitation_accept_path: str = "/accept-invite"

    # Service Area Settings
    service_area_mode: Literal["postal", "geo"] = "geo"
    postal_code_length: int = 6
    default_delivery_radius_km: float = 10.0

    # Order Settings
    order_max_quantity: int = 99
    order_max_lines: int = 50

    # Geocoding Settings (OpenStreetMap Nominatim)
    geocoding_enabled: bool = True
    geocoding_url: str = "https://nominatim.openstreetmap.org/search"
    geocoding_country_code: str = "in"
    geocoding_country_name: str = "India"
    geocoding_user_agent: str = "OutletBase/0.1"
    geocoding_timeout_seconds: float = 5.0

    # Email Settings
    email_provider: Literal["console", "smtp", "resend"] = "console"
    email_from: str = "noreply@outletbase.local"
    email_from_name: str = "OutletBase"
    email_reply_to: str | None = None
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    smtp_use_ssl: bool = False
    smtp_timeout: int = 10
    resend_api_key: str | None = None

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("default_delivery_radius_km")
    @classmethod
    def validate_default_radius(cls, v: float) -> float:
        """Delivery radius must be positive."""
        if v <= 0:
            raise ValueError("default_delivery_radius_km must be positive")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    @property
    def invitation_accept_url(self) -> str:
        """Base URL of the page where invitees accept an invitation."""
        return f"{self.external_url.rstrip('/')}{self.invitation_accept_path}"

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        """Validate that SQLite is not used with multiple workers."""
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers, but SQLite requires workers=1. "
                "Either use --workers 1 or switch to PostgreSQL."
            )
        return self

    @model_validator(mode="after")
    def validate_email_provider(self) -> "Settings":
        """Resend requires an API key."""
        if self.email_provider == "resend" and not self.resend_api_key:
            raise ValueError("OUTLETBASE_RESEND_API_KEY is required when email_provider=resend")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
