"""Application configuration with environment validation.

Usage:
    from tunas.config import get_settings

    settings = get_settings()
    print(settings.api_url)
    print(settings.page_size)

Settings are read from environment variables and an optional ``.env`` file
in the working directory.
"""

from enum import StrEnum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://tunas-webapp-backend-production.up.railway.app"


class Environment(StrEnum):
    """Application environment."""

    LOCAL = "local"
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class LogFormat(StrEnum):
    """Log output format."""

    CONSOLE = "console"
    JSON = "json"


class Settings(BaseSettings):
    """Dashboard settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Environment = Environment.DEVELOPMENT

    # Tunas backend
    api_url: str = Field(default=DEFAULT_API_URL, description="Tunas API base URL")
    request_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")

    # Tables and charts
    page_size: int = Field(default=50, gt=0, description="Rows per table page")
    max_initial_series: int = Field(
        default=8, gt=0, description="Events shown when a chart is first opened"
    )

    # Local state (last used club code)
    state_dir: Path = Field(
        default=Path.home() / ".tunas", description="Directory for local dashboard state"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: LogFormat | None = Field(
        default=None, description="Log output format (default: json in production, else console)"
    )

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def state_file(self) -> Path:
        """Path of the JSON file holding the last used club code."""
        return self.state_dir / "state.json"

    @property
    def resolved_log_format(self) -> LogFormat:
        if self.log_format is not None:
            return self.log_format
        return LogFormat.JSON if self.is_production else LogFormat.CONSOLE

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.environment == Environment.LOCAL

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
        get_settings.cache_clear()
    """
    return Settings()
