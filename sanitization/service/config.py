# sanitization/service/config.py

"""Application configuration using Pydantic Settings.

Manages environment variables, defaults, and validation rules.
"""

from pathlib import Path
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sanitization.core.definitions import Preset

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Global application settings.

    Loads values from environment variables (prefix 'SANITIZER_') or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SANITIZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Core Settings
    default_preset: str = Field(
        default=Preset.DEFAULT,
        description="Preset applied when the caller does not pass a profile.",
    )

    default_language: Optional[str] = Field(
        default=None,
        description="Language code used when the caller does not pass one.",
    )

    max_input_chars: int = Field(
        default=1_000_000,
        gt=0,
        description="Largest input, in code points, accepted by the service.",
    )

    log_level: str = Field(default="INFO", description="Root logging level.")

    presets_path: Optional[Path] = Field(
        default=None,
        description="Alternative presets YAML file; the bundled file when unset.",
    )

    @field_validator("default_preset")
    @classmethod
    def validate_preset_name(cls, v: str) -> str:
        """Ensure preset name is not empty."""
        if not v.strip():
            raise ValueError("Default preset name cannot be empty")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the level is one the logging module knows."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of {LOG_LEVELS}")
        return level


# Singleton settings instance
settings = Settings()
