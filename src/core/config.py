"""Configuration management for taskquest."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    # Storage Configuration
    storage_backend: Literal["memory", "sqlite"] = Field(
        default="memory", description="Key-value backend holding per-account state"
    )
    sqlite_db_path: str = Field(default="./data/taskquest.db", description="SQLite file used by the sqlite backend")

    # Session Defaults
    default_username: str = Field(default="User-XXXX", description="Username shown before the user picks one")
    default_theme: str = Field(default="system", description="Theme applied to accounts without a stored theme")

    def require_setting(self, field_name: str, purpose: str) -> str:
        """Validate that a required setting is present, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            purpose: Human-readable purpose for the error message

        Returns:
            The setting value

        Raises:
            ValueError: If the setting is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{purpose} is not configured. Set {field_name.upper()} environment variable or add to .env file."
            )
        return value


# Application Constants
class Constants:
    """Progression rules shared by every engine."""

    # XP awards
    BASE_TASK_XP: int = 20
    HIGH_PRIORITY_BONUS_XP: int = 30
    ON_TIME_BONUS_XP: int = 10
    STREAK_BONUS_XP: int = 5

    # Levels
    XP_PER_LEVEL: int = 100

    # Storage
    STORAGE_KEY_SEPARATOR: str = ":"
    SQLITE_TABLE_NAME: str = "kv"


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
