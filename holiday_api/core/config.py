from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings and configuration"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Holiday API"

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8080

    # Storage
    DATA_DIR: str = "data"

    # Scraping
    SOURCE_BASE_URL: str = "https://www.tanggalan.com"
    SCRAPE_TIMEOUT: Optional[float] = None  # None = no timeout beyond the transport's

    # Yearly refresh loop
    SCHEDULER_ENABLED: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "human"  # "human" or "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
