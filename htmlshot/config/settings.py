"""
Application settings.

Values are read from the environment (prefix ``HTMLSHOT_``) or a local
``.env`` file. Tests build a ``Settings`` directly and install it with
``init_settings``.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Chromium flags suited to containers and serverless sandboxes
DEFAULT_BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--no-zygote",
    "--hide-scrollbars",
]


class Settings(BaseSettings):
    """Service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HTMLSHOT_",
        env_file=".env",
        extra="ignore",
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    environment: Literal["development", "production"] = "production"

    # Browser
    headless: bool = True
    browser_args: list[str] = Field(default_factory=lambda: list(DEFAULT_BROWSER_ARGS))
    browser_executable_path: str | None = None
    ignore_https_errors: bool = True

    # Timeouts (milliseconds)
    launch_timeout_ms: float = 30000
    content_timeout_ms: float = 20000
    capture_timeout_ms: float = 30000
    close_timeout_ms: float = 10000
    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = "networkidle"

    # Option bounds
    max_dimension: int = Field(default=5000, gt=0)
    max_scale: float = Field(default=4, gt=0)

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def init_settings(settings: Settings) -> Settings:
    """Install an explicit settings instance (used by tests and embedders)."""
    global _settings
    _settings = settings
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next ``get_settings`` reloads them."""
    global _settings
    _settings = None
