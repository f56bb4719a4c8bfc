"""Docker-backed exporter.

This module handles:
- Composing docker build/tag/push commands from an export context
- Executing them with subprocess
- Enforcing build and push timeouts

It is the default collaborator for SingleAppExporter. Git sources are
never fetched; the build context is used as found on disk.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from imagepush.export.exporter import ExportError
from imagepush.export.tagging import format_reference
from imagepush.types import ExportResult

if TYPE_CHECKING:
    from imagepush.export.context import ExportContext
    from imagepush.project.schema import BuildConfigSchema

logger = logging.getLogger(__name__)

LOCAL_TAG = "imagepush"


class ExportExecutionError(ExportError):
    """Raised when a docker command fails."""

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        code: str = "command_failed",
    ) -> None:
        super().__init__(message, code=code)
        self.exit_code = exit_code


def local_image_name(project_name: str, app_name: str) -> str:
    """Return the local image name an application is built as."""
    return f"{project_name}/{app_name}:{LOCAL_TAG}".lower()


def compose_build_command(
    config: BuildConfigSchema,
    image: str,
    base_path: Path,
    docker_bin: str = "docker",
) -> list[str]:
    """Compose the `docker build` command for a build configuration.

    Args:
        config: Build configuration.
        image: Local image name to tag the result with.
        base_path: Directory the configuration's context is relative to.
        docker_bin: Docker executable.

    Returns:
        Command as list of strings suitable for subprocess.
    """
    context_dir = base_path / config.context
    cmd = [docker_bin, "build", "-t", image]
    cmd.extend(["-f", str(context_dir / config.dockerfile)])

    if config.target:
        cmd.extend(["--target", config.target])

    for key in sorted(config.build_args):
        cmd.extend(["--build-arg", f"{key}={config.build_args[key]}"])

    cmd.append(str(context_dir))
    return cmd


def compose_inspect_command(image: str, docker_bin: str = "docker") -> list[str]:
    """Compose the command checking that a local image exists."""
    return [docker_bin, "image", "inspect", image]


def compose_tag_command(
    image: str, reference: str, docker_bin: str = "docker"
) -> list[str]:
    """Compose the command tagging ``image`` as ``reference``."""
    return [docker_bin, "tag", image, reference]


def compose_push_command(reference: str, docker_bin: str = "docker") -> list[str]:
    """Compose the command pushing ``reference``."""
    return [docker_bin, "push", reference]


def run_command(
    cmd: list[str],
    timeout: int | None = None,
    cwd: Path | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a docker command.

    Args:
        cmd: Command to execute.
        timeout: Timeout in seconds (None = no timeout).
        cwd: Optional working directory.

    Returns:
        The completed process.

    Raises:
        ExportExecutionError: If the command cannot start, times out or
            exits non-zero.
    """
    cmd_str = shlex.join(cmd)
    logger.info("Executing: %s", cmd_str)

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        message = f"Command timed out after {timeout} seconds: {cmd_str}"
        logger.error(message)
        raise ExportExecutionError(
            message,
            exit_code=-1,
            code="export_timeout",
        ) from e
    except OSError as e:
        message = f"Failed to execute {cmd[0]}: {e}"
        logger.error(message)
        raise ExportExecutionError(
            message,
            exit_code=None,
            code="execution_error",
        ) from e

    if result.stdout:
        logger.debug("%s", result.stdout.rstrip())

    if result.returncode != 0:
        message = f"Command failed with exit code {result.returncode}: {cmd_str}"
        logger.error("%s\n%s", message, (result.stderr or "").rstrip())
        raise ExportExecutionError(message, exit_code=result.returncode)

    return result


class DockerExporter:
    """Build an application image and push it under every requested tag.

    Attributes:
        tags: Tags substituted into the tag template, in push order.
        docker_bin: Docker executable.
        build_timeout: Timeout for `docker build` in seconds.
        push_timeout: Timeout for each tag/push command in seconds.
        base_path: Directory build contexts are relative to.
        dry_run: Compose and log commands without running them.
    """

    def __init__(
        self,
        tags: list[str],
        docker_bin: str = "docker",
        build_timeout: int | None = None,
        push_timeout: int | None = None,
        base_path: Path | None = None,
        dry_run: bool = False,
    ) -> None:
        if not tags:
            raise ValueError("At least one tag is required")
        self.tags = list(tags)
        self.docker_bin = docker_bin
        self.build_timeout = build_timeout
        self.push_timeout = push_timeout
        self.base_path = base_path if base_path is not None else Path.cwd()
        self.dry_run = dry_run

    def _execute(
        self, cmd: list[str], commands: list[str], timeout: int | None
    ) -> None:
        commands.append(shlex.join(cmd))
        if self.dry_run:
            logger.info("[dry run] %s", shlex.join(cmd))
            return
        run_command(cmd, timeout=timeout)

    def export(
        self, context: ExportContext, repo: str, tag_format: str
    ) -> ExportResult:
        """Build (if requested) and push the context's application.

        Args:
            context: Export context for one build configuration.
            repo: Destination repository.
            tag_format: Template with ``%{repo}`` and ``%{tag}`` placeholders.

        Returns:
            ExportResult listing the pushed references.

        Raises:
            ExportExecutionError: If a docker command fails.
            ValueError: If ``tag_format`` has placeholders other than repo/tag.
        """
        config = context.config
        image = local_image_name(context.project.name, config.name)
        commands: list[str] = []

        if context.ignore_git_fetch:
            logger.debug("Skipping git fetch for %s", config.name)

        references = [
            format_reference(tag_format, repo=repo, tag=tag) for tag in self.tags
        ]

        if context.should_be_built:
            logger.info("Building %s as %s", config.name, image)
            self._execute(
                compose_build_command(
                    config, image, self.base_path, docker_bin=self.docker_bin
                ),
                commands,
                self.build_timeout,
            )
        else:
            try:
                self._execute(
                    compose_inspect_command(image, docker_bin=self.docker_bin),
                    commands,
                    self.push_timeout,
                )
            except ExportExecutionError as e:
                if e.code != "command_failed":
                    raise
                raise ExportExecutionError(
                    f"Local image not found: {image}",
                    exit_code=e.exit_code,
                    code="image_not_found",
                ) from e

        for reference in references:
            self._execute(
                compose_tag_command(image, reference, docker_bin=self.docker_bin),
                commands,
                self.push_timeout,
            )
            self._execute(
                compose_push_command(reference, docker_bin=self.docker_bin),
                commands,
                self.push_timeout,
            )
            logger.info("Pushed %s", reference)

        return ExportResult(
            success=True,
            references=references,
            built=context.should_be_built,
            image=image,
            commands=commands,
        )


__all__ = [
    "DockerExporter",
    "ExportExecutionError",
    "compose_build_command",
    "compose_inspect_command",
    "compose_push_command",
    "compose_tag_command",
    "local_image_name",
    "run_command",
]
