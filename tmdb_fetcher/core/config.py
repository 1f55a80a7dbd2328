"""
Configuration Management
Loads and validates environment variables
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Fetcher settings from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # API Keys (required at run time, checked by the CLI)
    TMDB_API_KEY: Optional[str] = None

    # Upstream endpoints
    TMDB_API_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p/w500"

    # Output
    OUTPUT_PATH: str = "movies.json"
    CATEGORIES_FILE: Optional[str] = None

    # Enrichment
    INCLUDE_CREDITS: bool = True
    CAST_LIMIT: int = 10

    # Performance Limits
    REQUEST_TIMEOUT: float = 10.0  # seconds, single attempt
    MAX_CONCURRENT_API_CALLS: int = 10

    # Development
    LOG_LEVEL: str = "INFO"


settings = Settings()
