"""Export context passed from the orchestration step to an exporter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ExportContext:
    """Binds one build configuration to its project for a single export.

    Attributes:
        config: The build configuration to export.
        project: The project owning ``config``.
        ignore_git_fetch: Skip fetching fresh git sources before acting.
        should_be_built: Build the image as part of the export instead of
            referencing an existing one.
    """

    config: Any
    project: Any
    ignore_git_fetch: bool
    should_be_built: bool

    @classmethod
    def for_push(cls, config: Any, project: Any) -> ExportContext:
        """Context for the single-app push: no fetch, always build."""
        return cls(
            config=config,
            project=project,
            ignore_git_fetch=True,
            should_be_built=True,
        )


__all__ = ["ExportContext"]
