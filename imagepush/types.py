"""Shared type definitions for imagepush.

This module contains dataclasses and enums shared across subpackages
to avoid circular imports.
"""

from dataclasses import dataclass, field
from enum import Enum


class LogLevel(str, Enum):
    """Logging level names accepted on the command line."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ArityError(str, Enum):
    """Why a collection did not hold exactly one element."""

    EMPTY = "empty"
    TOO_MANY = "too_many"


@dataclass
class ExportResult:
    """Result of exporting an application image.

    Attributes:
        success: Whether every push succeeded.
        references: Pushed ``repo:tag`` references, in push order.
        built: Whether the image was built as part of the export.
        image: Local image name the references point at.
        commands: Commands executed (or composed, in dry-run mode).
    """

    success: bool
    references: list[str] = field(default_factory=list)
    built: bool = False
    image: str | None = None
    commands: list[str] = field(default_factory=list)


__all__ = ["ArityError", "ExportResult", "LogLevel"]
