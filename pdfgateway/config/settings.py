"""
Service settings.

Read from environment variables (and an optional .env file) once, then cached.
Tests swap the cached instance with init_settings()/reset_settings().
"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """PDF Gateway configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Server ===
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    log_level: str = "INFO"
    environment: str = Field(
        default="production",
        description="production or development; development exposes stack traces",
    )

    # === CORS ===
    allowed_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins",
    )

    # === Rate limiting (applies to /api/ routes) ===
    rate_limit_enabled: bool = True
    rate_limit_window_seconds: int = Field(default=15 * 60, ge=1)
    rate_limit_max_requests: int = Field(default=100, ge=1)

    # === Browser ===
    browser_headless: bool = True
    chrome_executable_path: str | None = Field(
        default=None,
        validation_alias=AliasChoices("chrome_executable_path", "puppeteer_executable_path"),
        description="Use a system Chrome instead of Playwright's bundled Chromium",
    )
    render_timeout_ms: int = Field(default=30000, ge=1000, le=300000)
    disconnect_poll_interval: float = Field(default=0.5, gt=0)

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("environment")
    @classmethod
    def _lower_environment(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        return origins or ["*"]

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
    """Install an explicit settings instance (used by tests and embedding)."""
    global _settings
    _settings = settings
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
