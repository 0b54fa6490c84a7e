"""Configuration management.

Uses pydantic-settings for type-safe configuration from environment variables.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    All settings can be overridden via environment variables.
    Prefix: DATASKIM_
    """

    model_config = SettingsConfigDict(
        env_prefix="DATASKIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Sparklines
    histogram_bins: int = Field(
        default=8,
        ge=1,
        description="Number of bins in the inline numeric histogram",
    )
    linegraph_length: int = Field(
        default=16,
        ge=1,
        description="Number of points in an inline line graph",
    )

    # Categorical summaries
    top_counts_max_levels: int = Field(
        default=4,
        ge=1,
        description="Number of most frequent levels shown by top_counts",
    )
    top_counts_max_char: int = Field(
        default=3,
        ge=1,
        description="Characters kept from each level label in top_counts",
    )

    # Execution
    max_workers: int | None = Field(
        default=None,
        description="Thread pool size for column computation (None = sequential)",
    )

    # Logging
    log_level: str = Field(default="WARNING")
    log_format: str = Field(default="console")  # 'json' or 'console'


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
