"""
API Configuration

All secrets loaded from environment variables.
NEVER hardcode API keys, passwords, or secrets.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App info
    app_name: str = "PantryLog API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Security - API Keys (comma-separated list)
    api_keys: str = ""  # Loaded from API_KEYS env var

    # CORS
    cors_origins: str = "http://localhost:8501,http://localhost:3000"

    # Ledger storage: sqlite, file or memory
    storage_backend: str = "sqlite"
    database_path: str = "./data/db/pantrylog.db"
    ledger_file: str = "./data/transactions.jsonl"

    # OpenAI (for command parsing)
    openai_api_key: Optional[str] = None  # Loaded from OPENAI_API_KEY env var
    openai_model: str = "gpt-4o-mini"

    # Logging
    log_level: str = "INFO"

    @property
    def api_key_list(self) -> List[str]:
        """Parse comma-separated API keys."""
        if not self.api_keys:
            return []
        return [k.strip() for k in self.api_keys.split(",") if k.strip()]

    @property
    def cors_origin_list(self) -> List[str]:
        """Parse comma-separated CORS origins."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def storage_path(self) -> Optional[str]:
        """Path used by the configured storage backend."""
        backend = self.storage_backend.lower()
        if backend == "sqlite":
            return self.database_path
        if backend == "file":
            return self.ledger_file
        return None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
