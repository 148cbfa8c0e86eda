"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """Procurement ledger policy switches."""

    model_config = SettingsConfigDict(env_prefix="LEDGER_")

    # Backorder model: let Out/Adjustment movements drive stock below zero
    allow_negative_stock: bool = False

    # Write-off model: allow Paid while an outstanding balance remains
    allow_paid_with_outstanding: bool = True

    max_line_items: int = Field(default=100, ge=1)

    # Optimistic concurrency retries for stock movements
    max_write_retries: int = Field(default=3, ge=1)


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "procurement.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Procurement Ledger"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    ledger: LedgerSettings = Field(default_factory=LedgerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
