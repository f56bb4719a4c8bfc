"""Project definitions.

This module handles:
- Project and build configuration schemas
- Loading project files from YAML/JSON
"""

from imagepush.project.schema import BuildConfigSchema, ProjectSchema

__all__ = ["BuildConfigSchema", "ProjectSchema"]
