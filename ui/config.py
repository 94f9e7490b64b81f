"""UI Configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class UISettings(BaseSettings):
    """UI settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="UI_",
        extra="ignore",
    )

    # API connection
    api_base_url: str = "http://localhost:8000"
    api_key: str = ""

    # UI settings
    page_title: str = "Kitchen Inventory"

    # Timeouts (seconds)
    request_timeout: int = 30


@lru_cache()
def get_settings() -> UISettings:
    """Get cached settings instance."""
    return UISettings()
