"""Exception hierarchy for gtui.

Ingestion raises SourceReadError or TopologyError and never returns partial
results. NavigationInvariantViolation marks programming errors only; user
input is clamped and never raises.
"""

from pathlib import Path


class GtuiError(Exception):
    """Base class for all gtui errors."""


class SourceReadError(GtuiError):
    """A Graphite metadata file is missing, unreadable, or malformed."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"Failed to read {path}: {message}")


class TopologyError(GtuiError):
    """Branch topology is internally inconsistent (dangling parent, missing trunk, cycle)."""


class NavigationInvariantViolation(GtuiError, AssertionError):
    """A cursor points at a branch or commit that is not in the loaded data."""
