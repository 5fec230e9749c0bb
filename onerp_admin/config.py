from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    app_title: str = "ONERP Admin"
    app_env: str = "development"

    # ONERP gateway
    onerp_api_url: str = "http://localhost:3009"
    onerp_api_timeout: float | None = None  # None keeps the httpx default

    # Paging & search
    default_page_size: int = 10
    search_page_size: int = 20
    autocomplete_min_chars: int = 3
    autocomplete_stale_seconds: float = 30.0

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"            # Root / app-wide
    log_level_http: str = "WARNING"    # httpx / httpcore transport
    log_level_api: str = "INFO"        # ONERP API adapter
    log_level_cache: str = "INFO"      # Query cache and module state

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance, reads .env once."""
    return Settings()
