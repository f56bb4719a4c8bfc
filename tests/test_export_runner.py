"""Tests for export/runner.py module.

Tests docker command composition and execution.
Uses mocked subprocess for execution tests.
"""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from imagepush.export.context import ExportContext
from imagepush.export.exporter import TAG_FORMAT, ExportError
from imagepush.export.runner import (
    DockerExporter,
    ExportExecutionError,
    compose_build_command,
    compose_inspect_command,
    compose_push_command,
    compose_tag_command,
    local_image_name,
    run_command,
)
from imagepush.project.schema import BuildConfigSchema, ProjectSchema


@pytest.fixture
def minimal_config() -> BuildConfigSchema:
    """Create a minimal build configuration."""
    return BuildConfigSchema(name="web")


@pytest.fixture
def full_config() -> BuildConfigSchema:
    """Create a build configuration with all fields."""
    return BuildConfigSchema(
        name="api",
        context="services/api",
        dockerfile="Dockerfile.prod",
        target="runtime",
        build_args={"VERSION": "1.0", "APP_ENV": "prod"},
    )


@pytest.fixture
def context(minimal_config: BuildConfigSchema) -> ExportContext:
    """Create a push context for a one-app project."""
    project = ProjectSchema(name="Shop", apps=[minimal_config])
    return ExportContext.for_push(config=minimal_config, project=project)


class TestLocalImageName:
    """Tests for local_image_name function."""

    def test_lowercased(self) -> None:
        assert local_image_name("Shop", "Web") == "shop/web:imagepush"


class TestComposeBuildCommand:
    """Tests for compose_build_command function."""

    def test_minimal(self, minimal_config: BuildConfigSchema) -> None:
        cmd = compose_build_command(minimal_config, "shop/web:imagepush", Path("/p"))
        assert cmd == [
            "docker",
            "build",
            "-t",
            "shop/web:imagepush",
            "-f",
            str(Path("/p") / "." / "Dockerfile"),
            str(Path("/p") / "."),
        ]

    def test_full(self, full_config: BuildConfigSchema) -> None:
        cmd = compose_build_command(
            full_config, "shop/api:imagepush", Path("/p"), docker_bin="podman"
        )
        assert cmd[0] == "podman"
        assert cmd[-1] == str(Path("/p") / "services/api")
        assert "-f" in cmd
        assert cmd[cmd.index("-f") + 1] == str(
            Path("/p") / "services/api" / "Dockerfile.prod"
        )
        assert cmd[cmd.index("--target") + 1] == "runtime"

    def test_build_args_sorted(self, full_config: BuildConfigSchema) -> None:
        """Build args should be emitted in key order."""
        cmd = compose_build_command(full_config, "img", Path("/p"))
        args = [cmd[i + 1] for i, part in enumerate(cmd) if part == "--build-arg"]
        assert args == ["APP_ENV=prod", "VERSION=1.0"]


class TestComposeOtherCommands:
    """Tests for tag/push/inspect command composition."""

    def test_tag(self) -> None:
        assert compose_tag_command("img", "repo:1") == ["docker", "tag", "img", "repo:1"]

    def test_push(self) -> None:
        assert compose_push_command("repo:1") == ["docker", "push", "repo:1"]

    def test_inspect(self) -> None:
        assert compose_inspect_command("img") == ["docker", "image", "inspect", "img"]


class TestRunCommand:
    """Tests for run_command function."""

    def test_success(self) -> None:
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="ok", stderr="")
            result = run_command(["docker", "push", "r:1"], timeout=60)

        assert result.returncode == 0
        assert mock_run.call_args.kwargs["timeout"] == 60
        assert mock_run.call_args.kwargs["check"] is False

    def test_nonzero_exit(self) -> None:
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="denied")
            with pytest.raises(ExportExecutionError) as exc_info:
                run_command(["docker", "push", "r:1"])

        assert exc_info.value.code == "command_failed"
        assert exc_info.value.exit_code == 1

    def test_timeout(self) -> None:
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = subprocess.TimeoutExpired(cmd="docker", timeout=10)
            with pytest.raises(ExportExecutionError) as exc_info:
                run_command(["docker", "build", "."], timeout=10)

        assert exc_info.value.code == "export_timeout"

    def test_missing_binary(self) -> None:
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("docker")
            with pytest.raises(ExportExecutionError) as exc_info:
                run_command(["docker", "version"])

        assert exc_info.value.code == "execution_error"
        assert exc_info.value.exit_code is None

    def test_is_export_error(self) -> None:
        assert issubclass(ExportExecutionError, ExportError)


class TestDockerExporter:
    """Tests for DockerExporter.export."""

    def test_requires_tags(self) -> None:
        with pytest.raises(ValueError):
            DockerExporter(tags=[])

    def test_build_then_tag_and_push(
        self, context: ExportContext, tmp_path: Path
    ) -> None:
        """Should build once, then tag and push every tag in order."""
        exporter = DockerExporter(tags=["latest", "v1"], base_path=tmp_path)

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
            result = exporter.export(context, "registry.example.com/shop", TAG_FORMAT)

        calls = [c.args[0] for c in mock_run.call_args_list]
        assert [c[1] for c in calls] == ["build", "tag", "push", "tag", "push"]
        assert calls[2] == ["docker", "push", "registry.example.com/shop:latest"]
        assert calls[4] == ["docker", "push", "registry.example.com/shop:v1"]
        assert result.success is True
        assert result.built is True
        assert result.image == "shop/web:imagepush"
        assert result.references == [
            "registry.example.com/shop:latest",
            "registry.example.com/shop:v1",
        ]
        assert len(result.commands) == 5

    def test_build_timeout_used(self, context: ExportContext, tmp_path: Path) -> None:
        exporter = DockerExporter(
            tags=["latest"], build_timeout=900, push_timeout=120, base_path=tmp_path
        )

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
            exporter.export(context, "repo", TAG_FORMAT)

        timeouts = [c.kwargs["timeout"] for c in mock_run.call_args_list]
        assert timeouts == [900, 120, 120]

    def test_build_failure_stops_push(
        self, context: ExportContext, tmp_path: Path
    ) -> None:
        """A failed build should raise before any push."""
        exporter = DockerExporter(tags=["latest"], base_path=tmp_path)

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=2, stdout="", stderr="boom")
            with pytest.raises(ExportExecutionError):
                exporter.export(context, "repo", TAG_FORMAT)

        assert mock_run.call_count == 1

    def test_existing_image_when_not_built(
        self, minimal_config: BuildConfigSchema, tmp_path: Path
    ) -> None:
        """Without should_be_built the local image is inspected, not built."""
        project = ProjectSchema(name="shop", apps=[minimal_config])
        context = ExportContext(
            config=minimal_config,
            project=project,
            ignore_git_fetch=True,
            should_be_built=False,
        )
        exporter = DockerExporter(tags=["latest"], base_path=tmp_path)

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
            result = exporter.export(context, "repo", TAG_FORMAT)

        first = mock_run.call_args_list[0].args[0]
        assert first[1:3] == ["image", "inspect"]
        assert result.built is False

    def test_missing_image_when_not_built(
        self, minimal_config: BuildConfigSchema, tmp_path: Path
    ) -> None:
        project = ProjectSchema(name="shop", apps=[minimal_config])
        context = ExportContext(
            config=minimal_config,
            project=project,
            ignore_git_fetch=True,
            should_be_built=False,
        )
        exporter = DockerExporter(tags=["latest"], base_path=tmp_path)

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="")
            with pytest.raises(ExportExecutionError) as exc_info:
                exporter.export(context, "repo", TAG_FORMAT)

        assert exc_info.value.code == "image_not_found"

    def test_dry_run_executes_nothing(
        self, context: ExportContext, tmp_path: Path
    ) -> None:
        exporter = DockerExporter(tags=["latest"], base_path=tmp_path, dry_run=True)

        with patch("subprocess.run") as mock_run:
            result = exporter.export(context, "repo", TAG_FORMAT)

        mock_run.assert_not_called()
        assert result.references == ["repo:latest"]
        assert result.commands[-1] == "docker push repo:latest"

    def test_bad_template_fails_before_running(
        self, context: ExportContext, tmp_path: Path
    ) -> None:
        exporter = DockerExporter(tags=["latest"], base_path=tmp_path)

        with patch("subprocess.run") as mock_run:
            with pytest.raises(ValueError):
                exporter.export(context, "repo", "%{repo}:%{branch}")

        mock_run.assert_not_called()
