"""Configuration management"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).parent.parent
DATA_DIR = BASE_DIR / "data"
LOGS_DIR = DATA_DIR / "logs"


class Settings(BaseSettings):
    """Application settings"""

    # Catalog (TMDB)
    TMDB_API_KEY: Optional[str] = None  # v4 read access token, sent as bearer
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p/w500"

    # Trending store (Appwrite)
    APPWRITE_ENDPOINT: str = "https://cloud.appwrite.io/v1"
    APPWRITE_PROJECT_ID: Optional[str] = None
    APPWRITE_DATABASE_ID: Optional[str] = None
    APPWRITE_COLLECTION_ID: Optional[str] = None
    APPWRITE_API_KEY: Optional[str] = None

    API_TIMEOUT: float = 15.0

    # Search behaviour
    SEARCH_DEBOUNCE_MS: int = 500
    SUGGESTION_MIN_CHARS: int = 2
    SUGGESTION_LIMIT: int = 6
    SCROLL_THRESHOLD_PX: int = 300
    TRENDING_LIMIT: int = 5

    # Directories
    LOGS_DIR: Path = LOGS_DIR

    HOST: str = "0.0.0.0"
    PORT: int = 8765
    ALLOWED_ORIGINS: Optional[str] = None  # Comma-separated origins for the view layer

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def debounce_seconds(self) -> float:
        return self.SEARCH_DEBOUNCE_MS / 1000.0


def get_settings() -> Settings:
    """Build the settings object; called once at startup"""
    return Settings()
