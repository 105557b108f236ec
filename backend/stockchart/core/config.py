"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STOCKCHART_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "StockChart Indicator Engine"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (Frontend URL)
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Input limits
    max_bars: int = 5000

    # Support/resistance detection defaults
    level_lookback: int = 5
    level_cluster_threshold: float = 0.02


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
