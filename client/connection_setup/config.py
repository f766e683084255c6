"""
Connection Setup - Configuration

Centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ==========================================================================
    # Backend API Settings
    # ==========================================================================
    api_base_url: str = Field(default="http://localhost:7377", alias="API_BASE_URL")
    request_timeout_seconds: float = Field(default=30.0, alias="API_TIMEOUT_SECONDS")
    upload_timeout_seconds: float = Field(
        default=300.0,
        alias="API_UPLOAD_TIMEOUT_SECONDS",
        description="Timeout for file uploads, which may be large",
    )

    # ==========================================================================
    # Validation Limits
    # ==========================================================================
    max_upload_bytes: int = Field(
        default=500 * 1024 * 1024,
        alias="MAX_UPLOAD_BYTES",
        description="Largest file accepted for a file connection (500MB)",
    )
    system_prompt_min_length: int = Field(default=10, alias="SYSTEM_PROMPT_MIN_LENGTH")

    # ==========================================================================
    # Feature Flags
    # ==========================================================================
    show_sample_datasets: bool = Field(default=False, alias="SHOW_SAMPLE_DATASETS")

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO", alias="LOG_LEVEL")
    log_format: Literal["text", "json"] = Field(default="text", alias="LOG_FORMAT")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
