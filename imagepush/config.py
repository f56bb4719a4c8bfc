"""Configuration settings for imagepush.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_tags() -> list[str]:
    """Return the default tag list."""
    return ["latest"]


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the IMAGEPUSH_ prefix.
    CLI flags can override these at runtime.
    """

    model_config = SettingsConfigDict(
        env_prefix="IMAGEPUSH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Project
    project_file: Path = Field(
        default=Path("imagepush.yaml"),
        description="Project file describing the build configurations",
    )
    default_tags: list[str] = Field(
        default_factory=_default_tags,
        description="Tags pushed when none are given on the command line",
    )

    # Tooling
    docker_bin: str = Field(
        default="docker",
        description="Docker CLI executable",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # Timeouts (in seconds)
    build_timeout: int = Field(
        default=3600,
        ge=60,
        description="Timeout for image builds",
    )
    push_timeout: int = Field(
        default=1800,
        ge=60,
        description="Timeout for each tag/push command",
    )


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["Settings", "get_settings", "print_settings_json"]
