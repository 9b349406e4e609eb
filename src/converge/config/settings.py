"""
Engine settings using Pydantic.

Provides environment-based configuration loading with CONVERGE_ prefix.
The why-run flag here is only the default for new run contexts; each
RunContext carries its own mode.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CONVERGE_",
    )

    # Simulation mode
    why_run: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Shell helpers
    shell_timeout: float | None = None

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("log_format")
    @classmethod
    def _known_log_format(cls, value: str) -> str:
        fmt = value.lower()
        if fmt not in {"json", "console"}:
            raise ValueError(f"Unknown log format: {value}")
        return fmt

    @field_validator("shell_timeout")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("shell_timeout must be positive")
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
