"""
Configuration module for the ClipQueue API.

This module centralizes all environment variables and runtime configuration
using pydantic-settings for type-safe configuration management.
"""

import logging
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # CORS Configuration
    allowed_origin: str = Field(
        default="http://localhost:3000",
        validation_alias="ALLOWED_ORIGIN",
        description="Allowed CORS origin for API requests"
    )

    # Supabase Configuration
    supabase_url: Optional[str] = Field(
        default=None,
        validation_alias="SUPABASE_URL",
        description="Supabase project URL"
    )

    supabase_service_key: Optional[str] = Field(
        default=None,
        validation_alias="SUPABASE_SERVICE_KEY",
        description="Supabase service role key (server-side queries and token checks)"
    )

    supabase_anon_key: Optional[str] = Field(
        default=None,
        validation_alias="SUPABASE_ANON_KEY",
        description="Supabase anon key (OAuth code exchange)"
    )

    # YouTube Data API
    youtube_api_key: Optional[str] = Field(
        default=None,
        validation_alias="YOUTUBE_API_KEY",
        description="YouTube Data API v3 key; search/video/playlist serve mock data without it"
    )

    # Google OAuth
    google_client_id: Optional[str] = Field(
        default=None,
        validation_alias="GOOGLE_CLIENT_ID",
        description="Google OAuth client id"
    )

    google_client_secret: Optional[str] = Field(
        default=None,
        validation_alias="GOOGLE_CLIENT_SECRET",
        description="Google OAuth client secret"
    )

    app_base_url: str = Field(
        default="http://localhost:3000",
        validation_alias="APP_BASE_URL",
        description="Public base URL used for OAuth redirects"
    )

    environment: str = Field(
        default="development",
        validation_alias="ENVIRONMENT",
        description="Deployment environment; 'production' marks cookies secure"
    )

    # Outbound HTTP
    http_timeout_seconds: float = Field(
        default=30.0,
        validation_alias="HTTP_TIMEOUT_SECONDS",
        description="Timeout for YouTube and Google API requests"
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root log level for the API logger"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


def log_configuration_status(logger: logging.Logger) -> None:
    """Log which external services are configured, once at startup."""
    settings = get_settings()

    if settings.supabase_url and settings.supabase_service_key:
        logger.info("Supabase configuration detected")
    else:
        logger.warning("Supabase not configured (SUPABASE_URL/SUPABASE_SERVICE_KEY missing) - project storage disabled")

    if settings.youtube_api_key:
        logger.info("YouTube API key configured")
    else:
        logger.info("YouTube API key not configured - search, video info and playlist serve mock data")

    if not settings.google_client_id:
        logger.info("Google OAuth not configured (GOOGLE_CLIENT_ID missing)")
