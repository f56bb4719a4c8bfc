"""Single-application export orchestration.

This module provides the push step for projects that define exactly one
application:
- SingleAppExporter.run(): check the application count, build the export
  context and hand it to an exporter
- spush(): functional shortcut used by the CLI

Building, tagging and pushing are the exporter's job; whatever it returns
or raises reaches the caller unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol

from imagepush.export.arity import exactly_one
from imagepush.export.context import ExportContext
from imagepush.types import ExportResult

logger = logging.getLogger(__name__)

TAG_FORMAT = "%{repo}:%{tag}"


class ExportError(Exception):
    """Base error for export operations."""

    def __init__(self, message: str, code: str = "export_error") -> None:
        super().__init__(message)
        self.code = code


class UnexpectedApplicationCount(ExportError):
    """Raised when a project does not define exactly one application.

    Zero and several applications are the same error kind.
    """

    def __init__(self, count: int, code: str = "unexpected_apps_number") -> None:
        super().__init__(
            f"Expected exactly one application in project, found {count}",
            code=code,
        )
        self.count = count


class Project(Protocol):
    """Anything exposing its build configurations in order."""

    def build_configurations(self) -> Sequence[Any]: ...


class Exporter(Protocol):
    """Builds and pushes the image described by an export context."""

    def export(
        self, context: ExportContext, repo: str, tag_format: str
    ) -> ExportResult: ...


class SingleAppExporter:
    """Push the only application of a project through an exporter."""

    def __init__(self, exporter: Exporter) -> None:
        self.exporter = exporter

    def run(self, project: Project, repo: str) -> ExportResult:
        """Export the project's single application to ``repo``.

        Args:
            project: Project whose build configurations are checked.
            repo: Destination repository, passed through untouched.

        Returns:
            The exporter's result.

        Raises:
            UnexpectedApplicationCount: If the project does not define exactly
                one application. The exporter is not called in that case.
        """
        arity = exactly_one(project.build_configurations())
        if not arity.ok:
            logger.warning(
                "Refusing to push: %d application(s) defined (%s)",
                arity.count,
                arity.error.value if arity.error else "",
            )
            raise UnexpectedApplicationCount(arity.count)

        context = ExportContext.for_push(config=arity.value, project=project)
        logger.info("Exporting single application to %s", repo)
        return self.exporter.export(context, repo, TAG_FORMAT)


def spush(project: Project, repo: str, exporter: Exporter) -> ExportResult:
    """Push the single application of ``project`` to ``repo``.

    See SingleAppExporter.run().
    """
    return SingleAppExporter(exporter).run(project, repo)


__all__ = [
    "TAG_FORMAT",
    "ExportError",
    "Exporter",
    "Project",
    "SingleAppExporter",
    "UnexpectedApplicationCount",
    "spush",
]
