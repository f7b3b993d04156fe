"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront import __version__


def get_default_data_dir() -> Path:
    """Return the default data directory for on-device storage."""
    return Path.home() / ".storefront"


class Settings(BaseSettings):
    """Client configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Storefront"
    app_version: str = __version__

    # Backend API
    api_url: str = "http://localhost:8000"
    request_timeout_seconds: float = 15.0

    # Data directory (key/value store lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Serve canned data instead of calling the backend
    offline_mode: bool = False

    # Cache windows
    home_cache_duration_ms: int = 5 * 60 * 1000
    home_section_limit: int = 6
    user_cache_duration_ms: int = 24 * 60 * 60 * 1000

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "storefront.db"
        return f"sqlite+aiosqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
