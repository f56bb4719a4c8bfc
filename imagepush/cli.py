"""Thin CLI wrapper for imagepush.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console

from imagepush import __version__
from imagepush.config import get_settings, print_settings_json
from imagepush.project.io import load_project
from imagepush.project.schema import ProjectSchema
from imagepush.types import LogLevel

app = typer.Typer(
    name="imagepush",
    help="imagepush - build and push single-application project images",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"imagepush version {__version__}")
        raise typer.Exit()


def _print_json(data: object) -> None:
    console.print(
        json.dumps(data, indent=2), markup=False, highlight=False, soft_wrap=True
    )


def _load_project_or_exit(project_file: Path | None) -> tuple[ProjectSchema, Path]:
    """Load the project file, exiting with code 1 on any load error."""
    path = project_file if project_file is not None else get_settings().project_file
    try:
        project = load_project(path)
    except FileNotFoundError:
        console.print(f"[red]Project file not found: {path}[/red]")
        raise typer.Exit(code=1) from None
    except OSError as e:
        console.print(f"Cannot read {path}: {e}", style="red", markup=False)
        raise typer.Exit(code=1) from None
    except ValidationError as e:
        console.print(f"[red]Invalid project file {path}:[/red]")
        console.print(str(e), markup=False)
        raise typer.Exit(code=1) from None
    except (ValueError, yaml.YAMLError) as e:
        console.print(f"Error reading {path}: {e}", style="red", markup=False)
        raise typer.Exit(code=1) from None
    return project, path.resolve().parent


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    log_level: Annotated[
        LogLevel | None,
        typer.Option(
            "--log-level",
            help="Override the configured log level",
            case_sensitive=False,
        ),
    ] = None,
) -> None:
    """imagepush - build and push single-application project images."""
    level = log_level.value if log_level else get_settings().log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        console.print(
            print_settings_json(settings),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
    else:
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print("[bold]Project:[/bold]")
        console.print(f"  Project file:        {settings.project_file}")
        console.print(
            f"  Default tags:        {', '.join(settings.default_tags)}", markup=False
        )
        console.print()
        console.print("[bold]Tooling:[/bold]")
        console.print(f"  Docker binary:       {settings.docker_bin}")
        console.print(f"  Log level:           {settings.log_level}")
        console.print()
        console.print("[bold]Timeouts (seconds):[/bold]")
        console.print(f"  Build timeout:       {settings.build_timeout}")
        console.print(f"  Push timeout:        {settings.push_timeout}")


@app.command()
def apps(
    project_file: Annotated[
        Path | None,
        typer.Option("--project", "-p", help="Project file (YAML or JSON)"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List the applications defined by a project."""
    project, _ = _load_project_or_exit(project_file)
    configs = project.build_configurations()

    if json_output:
        _print_json([c.model_dump(exclude_none=True) for c in configs])
        return

    if not configs:
        console.print(f"[yellow]No applications defined in {project.name}[/yellow]")
        return

    console.print(f"[bold]{project.name}: {len(configs)} application(s)[/bold]")
    for c in configs:
        console.print(f"  [green]{c.name}[/green]")
        console.print(f"    Context: {c.context}")
        console.print(f"    Dockerfile: {c.dockerfile}")
        if c.target:
            console.print(f"    Target: {c.target}")


@app.command("spush")
def spush_cmd(
    repo: Annotated[str, typer.Argument(help="Destination repository")],
    project_file: Annotated[
        Path | None,
        typer.Option("--project", "-p", help="Project file (YAML or JSON)"),
    ] = None,
    tags: Annotated[
        list[str] | None,
        typer.Option("--tag", "-t", help="Tag to push (can be repeated)"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show docker commands without running them"),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Build the project's only application and push it to REPO.

    Fails if the project defines zero or several applications.
    """
    from imagepush.export.exporter import UnexpectedApplicationCount, spush
    from imagepush.export.runner import DockerExporter, ExportExecutionError
    from imagepush.export.tagging import validate_tag

    if not repo.strip():
        console.print("[red]Repository must not be empty[/red]")
        raise typer.Exit(code=1)

    settings = get_settings()
    effective_tags = tags or settings.default_tags
    try:
        for tag in effective_tags:
            validate_tag(tag)
    except ValueError as e:
        console.print(str(e), style="red", markup=False)
        raise typer.Exit(code=1) from None

    project, base_path = _load_project_or_exit(project_file)

    exporter = DockerExporter(
        tags=effective_tags,
        docker_bin=settings.docker_bin,
        build_timeout=settings.build_timeout,
        push_timeout=settings.push_timeout,
        base_path=base_path,
        dry_run=dry_run,
    )

    try:
        result = spush(project, repo, exporter)
    except UnexpectedApplicationCount as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("spush requires a project with exactly one application")
        raise typer.Exit(code=1) from None
    except ExportExecutionError as e:
        console.print(f"Push failed ({e.code}): {e}", style="red", markup=False)
        raise typer.Exit(code=1) from None

    if json_output:
        _print_json(asdict(result))
        return

    if dry_run:
        console.print("[yellow]Dry run - commands not executed:[/yellow]")
        for cmd in result.commands:
            console.print(f"  {cmd}", markup=False)
        return

    console.print(f"[green]Pushed {len(result.references)} reference(s):[/green]")
    for ref in result.references:
        console.print(f"  {ref}", markup=False)


__all__ = ["app"]
