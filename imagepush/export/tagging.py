"""Tag template formatting.

Templates use ``%{name}`` placeholders, e.g. ``%{repo}:%{tag}``.
"""

import re

PLACEHOLDER_PATTERN = re.compile(r"%\{([a-zA-Z_][a-zA-Z0-9_]*)\}")

# Docker reference grammar for the tag component
TAG_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.\-]{0,127}$")


def placeholders(template: str) -> list[str]:
    """Return placeholder names in the order they appear."""
    return PLACEHOLDER_PATTERN.findall(template)


def format_reference(template: str, **values: str) -> str:
    """Substitute every ``%{name}`` placeholder in ``template``.

    Args:
        template: Template string.
        **values: Placeholder values.

    Returns:
        Formatted string.

    Raises:
        ValueError: If the template names a placeholder with no value.
    """
    missing = [name for name in placeholders(template) if name not in values]
    if missing:
        raise ValueError(
            f"No value for placeholder(s) {', '.join(missing)} in '{template}'"
        )
    return PLACEHOLDER_PATTERN.sub(lambda m: values[m.group(1)], template)


def validate_tag(tag: str) -> str:
    """Validate a docker image tag.

    Args:
        tag: Tag to check.

    Returns:
        The tag, unchanged.

    Raises:
        ValueError: If the tag is not a valid docker tag.
    """
    if not TAG_PATTERN.fullmatch(tag):
        raise ValueError(
            f"Invalid tag '{tag}': must match [A-Za-z0-9_][A-Za-z0-9_.-]{{0,127}}"
        )
    return tag


__all__ = ["format_reference", "placeholders", "validate_tag"]
