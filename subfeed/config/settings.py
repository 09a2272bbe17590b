"""
Centralized configuration using Pydantic BaseSettings.
All environment variables are loaded here - no hardcoded secrets.
"""
from functools import lru_cache

from pydantic_settings import BaseSettings

PLACEHOLDER_PREFIXES = ("YOUR_", "<", "CHANGEME", "XXX")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Subscription Feed"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Identity provider
    GOOGLE_CLIENT_ID: str = ""
    YT_API_KEY: str = ""
    OAUTH_SCOPE: str = "https://www.googleapis.com/auth/youtube.readonly"

    # Catalog API
    CATALOG_BACKEND: str = "http"  # "http" or "memory"
    CATALOG_BASE_URL: str = "https://www.googleapis.com/youtube/v3"
    CATALOG_TIMEOUT_SEC: float = 10.0

    # Feed assembly
    SUBSCRIPTION_PAGE_SIZE: int = 50
    SUBSCRIPTION_MAX_PAGES: int = 1  # 1 = first page only
    CHANNEL_RECENT_LIMIT: int = 10
    DETAILS_BATCH_SIZE: int = 50
    CHANNEL_FETCH_CONCURRENCY: int = 1  # 1 = sequential

    # Search
    SEARCH_RESULT_LIMIT: int = 25

    # Telemetry
    ENABLE_OTEL: bool = False
    ENABLE_PROMETHEUS: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True

    def credentials_configured(self) -> bool:
        """True when both secrets are present and not placeholders."""
        return not (
            is_placeholder(self.GOOGLE_CLIENT_ID) or is_placeholder(self.YT_API_KEY)
        )


def is_placeholder(value: str) -> bool:
    cleaned = value.strip()
    if not cleaned:
        return True
    return cleaned.upper().startswith(PLACEHOLDER_PREFIXES)


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance - singleton pattern."""
    return Settings()
