"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Pipeline limits
    max_input_length: int = Field(
        default=10_000, gt=0, description="Maximum characters accepted per conversion"
    )
    max_keywords: int = Field(
        default=1000, gt=0, description="Maximum keywords processed per conversion"
    )
    max_keyword_length: int = Field(
        default=100, gt=0, description="Maximum characters in a single bare keyword"
    )
    cooldown_seconds: float = Field(
        default=0.1, ge=0, description="Minimum delay between two conversions"
    )

    # Output
    default_match_type: Literal["broad", "phrase", "exact"] = Field(
        default="broad", description="Match type used when none is given"
    )
    output_dir: str = Field(default="data/output", description="Directory for exported files")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: Literal["json", "text"] = Field(default="text", description="Log output format")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
