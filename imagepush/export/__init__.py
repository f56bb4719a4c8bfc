"""Export orchestration module.

This module handles:
- The exactly-one application precondition
- Export context construction
- Tag template formatting
- Delegating build and push to an exporter

Access the docker-backed exporter via imagepush.export.runner.
"""

from imagepush.export.context import ExportContext
from imagepush.export.exporter import (
    TAG_FORMAT,
    Exporter,
    ExportError,
    SingleAppExporter,
    UnexpectedApplicationCount,
    spush,
)

__all__ = [
    "TAG_FORMAT",
    "ExportContext",
    "ExportError",
    "Exporter",
    "SingleAppExporter",
    "UnexpectedApplicationCount",
    "spush",
]
