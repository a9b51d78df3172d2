# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values, plus the
# SupabaseConfig object the song repository is constructed with.
#
# Usage:
#   from app.config import settings
#   repository = SongRepository(settings.supabase_config())
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The Settings class validates all values at startup, so a missing Supabase
# URL or key stops the app before it serves a single request.
# =============================================================================

from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class SupabaseConfig:
    """
    Connection details for the hosted songs datastore.

    Passed explicitly to SongRepository instead of being read from the
    environment at import time.
    """
    url: str
    key: str
    songs_table: str = "songs"

    def __post_init__(self):
        if not self.url:
            raise ValueError("Supabase URL is required")
        if not self.key:
            raise ValueError("Supabase API key is required")
        if not self.songs_table:
            raise ValueError("Songs table name is required")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # URL and anon key are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        min_length=1,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        min_length=1,
        description="Supabase anon/public API key"
    )

    SUPABASE_SERVICE_KEY: str | None = Field(
        default=None,
        description="Supabase service_role key (bypasses RLS); used for writes when set"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 secret used to verify Supabase Auth tokens"
    )

    SONGS_TABLE: str = Field(
        default="songs",
        min_length=1,
        description="Table holding song records"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    API_BASE_URL: str = Field(
        default="http://localhost:8000",
        description="Base URL the songs API client talks to"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    def supabase_config(self) -> SupabaseConfig:
        """Build the explicit datastore config, preferring the service key."""
        return SupabaseConfig(
            url=self.SUPABASE_URL,
            key=self.SUPABASE_SERVICE_KEY or self.SUPABASE_ANON_KEY,
            songs_table=self.SONGS_TABLE,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
