"""Project file loading.

This module provides helpers for reading a project definition from a
YAML or JSON file and validating it against the project schema.
"""

import json
from pathlib import Path
from typing import Any

import yaml

from imagepush.project.schema import ProjectSchema

YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dict.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML content as a dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the document is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping, got {type(data).__name__}")
    return data


def load_json(path: Path) -> dict[str, Any]:
    """Load a JSON file and return its contents as a dict.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed JSON content as a dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the document is not an object.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def load_project(path: Path) -> ProjectSchema:
    """Load and validate a project file.

    The format is chosen from the file suffix.

    Args:
        path: Path to a .yaml, .yml or .json project file.

    Returns:
        Validated ProjectSchema instance.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the suffix is unsupported or the content is invalid.
        yaml.YAMLError: If a YAML file cannot be parsed.
        pydantic.ValidationError: If data does not match schema.
    """
    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        data = load_yaml(path)
    elif suffix in JSON_SUFFIXES:
        data = load_json(path)
    else:
        raise ValueError(
            f"Unsupported project file format '{suffix}' (use .yaml, .yml or .json)"
        )
    return ProjectSchema.model_validate(data)


__all__ = ["load_json", "load_project", "load_yaml"]
