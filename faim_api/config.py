"""Configuration management for the FAIM forecast API."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # API Settings
    API_TITLE: str = "FAIM Forecast API"
    API_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    WORKERS: int = 1

    # FAIM API Settings
    FAIM_API_KEY: Optional[str] = None
    FAIM_API_BASE_URL: str = "https://api.faim.it.com"
    REQUEST_TIMEOUT: float = 30.0  # seconds

    # Request limits
    MAX_HORIZON: int = 1024

    # Deployment mode: "development" or "production"
    ENVIRONMENT: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


# Global settings instance
settings = Settings()
