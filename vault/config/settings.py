"""
Application Settings.

Centralized configuration using Pydantic Settings with environment variable loading.
Every value has a default so the service can start without credentials; a missing
Supabase URL or key is reported through the "not configured" store path instead of
failing at import time.

Production Mode:
    When app_env="production", additional validations apply:
    - api_key_enabled must be True
    - debug must be False
    - cors_allowed_origins cannot be ["*"]
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Supabase
    # -------------------------------------------------------------------------
    supabase_url: str | None = Field(default=None, description="Supabase project URL")
    supabase_key: SecretStr | None = Field(
        default=None, description="Supabase anon or service key"
    )

    # -------------------------------------------------------------------------
    # Dynamic store
    # -------------------------------------------------------------------------
    store_backend: Literal["supabase", "memory"] = Field(
        default="supabase",
        description="Backend for the dynamic component store",
    )

    # -------------------------------------------------------------------------
    # Media storage
    # -------------------------------------------------------------------------
    storage_backend: Literal["local", "supabase"] = Field(
        default="local",
        description="Backend for uploaded preview media",
    )
    storage_bucket: str = Field(
        default="component-media",
        description="Supabase storage bucket holding preview media",
    )
    media_root: Path = Field(
        default=Path("public/uploads"),
        description="Local directory that receives uploads (served under media_url_prefix)",
    )
    media_url_prefix: str = Field(
        default="/uploads",
        description="Public URL prefix for files under media_root",
    )

    # -------------------------------------------------------------------------
    # Component sources
    # -------------------------------------------------------------------------
    show_sample_components: bool = Field(
        default=True,
        description="Include the code-authored sample components in the registry",
    )
    custom_components_path: Path | None = Field(
        default=None,
        description="JSON file with custom components pending migration",
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    api_host: str = Field(default="0.0.0.0", description="Bind address for uvicorn")
    api_port: int = Field(default=8000, description="Port for uvicorn")

    # -------------------------------------------------------------------------
    # Security Settings
    # -------------------------------------------------------------------------
    api_key: SecretStr | None = Field(
        default=None,
        description="API key for admin writes. If enabled, non-GET requests require X-API-Key.",
    )
    api_key_enabled: bool = Field(
        default=False,
        description="Enable API key authentication. Set True for production.",
    )

    # -------------------------------------------------------------------------
    # CORS Settings
    # -------------------------------------------------------------------------
    cors_allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins. Use ['*'] for development only.",
    )
    cors_allow_credentials: bool = Field(
        default=True,
        description="Allow credentials in CORS requests",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"

    @property
    def supabase_configured(self) -> bool:
        """Both the Supabase URL and key are present."""
        return bool(self.supabase_url) and self.supabase_key is not None

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production settings are secure."""
        if self.app_env == "production":
            errors = []

            if not self.api_key_enabled:
                errors.append("api_key_enabled must be True in production")

            if self.api_key_enabled and not self.api_key:
                errors.append("api_key must be set when api_key_enabled is True")

            if self.debug:
                errors.append("debug must be False in production")

            if "*" in self.cors_allowed_origins:
                errors.append("cors_allowed_origins cannot contain '*' in production")

            if errors:
                raise ValueError(
                    f"Production configuration errors: {'; '.join(errors)}"
                )

        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings if needed.
    """
    return Settings()
