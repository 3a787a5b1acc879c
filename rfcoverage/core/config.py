"""Package configuration settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
import logging
import os


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application
    APP_NAME: str = "RF Coverage Heatmap"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Coverage reporting
    COVERAGE_THRESHOLD_DBM: float = -70.0  # Minimum acceptable signal

    # File storage
    HEATMAP_PATH: str = "./static/heatmaps"


# Global settings instance
settings = Settings()


def configure_logging(level: Optional[str] = None):
    """Apply the configured log level to the root logger."""
    level = level or ("DEBUG" if settings.DEBUG else settings.LOG_LEVEL)
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


# Ensure directories exist
def ensure_directories():
    """Create necessary directories if they don't exist."""
    os.makedirs(settings.HEATMAP_PATH, exist_ok=True)
