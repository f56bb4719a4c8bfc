"""Pydantic models for project file validation.

A project file names the project and lists its applications. Each
application is one build configuration: the docker build context and the
options needed to build its image.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_.\-]+$")


def _validate_name(v: str) -> str:
    if not NAME_PATTERN.fullmatch(v):
        raise ValueError(
            f"name must contain only letters, digits, '_', '.' or '-', got '{v}'"
        )
    return v


class BuildConfigSchema(BaseModel):
    """Schema for one application build configuration.

    Attributes:
        name: Application name, unique within the project.
        context: Docker build context directory, relative to the project file.
        dockerfile: Dockerfile path, relative to the context.
        target: Optional multi-stage build target.
        build_args: Values passed as ``--build-arg KEY=VALUE``.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(description="Application name")
    context: str = Field(default=".", description="Docker build context")
    dockerfile: str = Field(default="Dockerfile", description="Dockerfile path")
    target: str | None = Field(default=None, description="Build stage target")
    build_args: dict[str, str] = Field(
        default_factory=dict, description="Docker build arguments"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate name format."""
        return _validate_name(v)


class ProjectSchema(BaseModel):
    """Schema for a project file.

    Attributes:
        name: Project name, used as the local image namespace.
        apps: Build configurations in declaration order.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(description="Project name")
    apps: list[BuildConfigSchema] = Field(
        default_factory=list, description="Application build configurations"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate name format."""
        return _validate_name(v)

    @model_validator(mode="after")
    def validate_unique_apps(self) -> "ProjectSchema":
        """Reject duplicate application names."""
        seen: set[str] = set()
        for app in self.apps:
            if app.name in seen:
                raise ValueError(f"duplicate application name: '{app.name}'")
            seen.add(app.name)
        return self

    def build_configurations(self) -> list[BuildConfigSchema]:
        """Return the build configurations in declaration order."""
        return list(self.apps)


__all__ = ["NAME_PATTERN", "BuildConfigSchema", "ProjectSchema"]
