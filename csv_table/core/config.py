"""
Configuration settings for csv_table.
Uses pydantic-settings for environment variable loading.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Default parse and format settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CSV_TABLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Parse configuration
    separator: str = ","
    enclosure: str = '"'
    escape: str = "\\"
    has_header: bool = True
    strict_parsing: bool = False  # Raise on unterminated quotes instead of closing them

    # Output configuration
    default_formatter: str = "csv"

    # Logging
    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for applications embedding csv_table.

    The library itself only creates module loggers; call this from an
    entry point to get console output.
    """
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
