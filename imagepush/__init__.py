"""imagepush - push a single-application project image to a registry.

This package wraps the docker CLI with a small orchestration layer that
builds the one application a project defines and pushes it under
``repo:tag`` references.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
