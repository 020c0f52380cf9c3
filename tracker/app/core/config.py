"""
Configuration settings for the Parcel Tracker.

This module handles application configuration using Pydantic settings.
"""

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "Parcel Tracker"

    # Database Configuration
    database_url: str = "sqlite+aiosqlite:///tracker.db"
    db_echo: bool = False
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    @property
    def log_level_value(self) -> int:
        """Numeric logging level, falling back to INFO for unknown names."""
        value = logging.getLevelName(self.log_level.upper())
        return value if isinstance(value, int) else logging.INFO


settings = Settings()
