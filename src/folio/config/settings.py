"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

FMP_BASE_URL = "https://financialmodelingprep.com/stable"

QUOTE_CACHE_TTL_SECONDS = 5 * 60
PROFILE_CACHE_TTL_SECONDS = 30 * 24 * 60 * 60
HISTORICAL_CACHE_TTL_SECONDS = 5 * 60


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".folio"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FOLIO_",
        extra="ignore",
    )

    app_name: str = "Folio Portfolio Tracker"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # HTTP server
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    # Data directory (asset store lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    # Upstream market data provider
    fmp_api_key: str = ""
    fmp_base_url: str = FMP_BASE_URL
    use_stub_market_data: Optional[bool] = None

    # HTTP retry policy
    http_timeout_seconds: float = 10.0
    http_max_retries: int = 2
    http_backoff_seconds: float = 1.0

    # Cache TTLs
    quote_cache_ttl_seconds: float = QUOTE_CACHE_TTL_SECONDS
    profile_cache_ttl_seconds: float = PROFILE_CACHE_TTL_SECONDS
    historical_cache_ttl_seconds: float = HISTORICAL_CACHE_TTL_SECONDS

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "portfolio.db"
        return f"sqlite:///{db_path}"

    def should_use_stub(self) -> bool:
        """Offline stub data is used when forced or when no API key is configured."""
        if self.use_stub_market_data is not None:
            return self.use_stub_market_data
        return not self.fmp_api_key


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
