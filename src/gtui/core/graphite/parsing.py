"""Parsing helpers for Graphite's JSON metadata files."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from gtui.core.errors import SourceReadError

logger = logging.getLogger(__name__)

SNAPSHOT_SUFFIX = ".snapshot"

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_graphite_json(content: str, model: type[ModelT], *, source: Path) -> ModelT:
    """Parse and validate JSON text against a Graphite schema.

    Args:
        content: Raw file contents
        model: Pydantic model describing the expected structure
        source: Path the content came from (used in error messages)

    Returns:
        Validated model instance

    Raises:
        SourceReadError: If the content is not JSON or does not match the schema
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise SourceReadError(source, f"invalid JSON: {e}") from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise SourceReadError(source, f"unexpected structure: {e}") from e


def read_graphite_json_file(path: Path, model: type[ModelT]) -> ModelT:
    """Read a Graphite JSON file from disk and validate it.

    Raises:
        SourceReadError: If the file is missing, unreadable, or malformed
    """
    if not path.is_file():
        raise SourceReadError(path, "file not found")

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(path, str(e)) from e

    logger.debug("Read %d bytes from %s", len(content), path)
    return parse_graphite_json(content, model, source=path)


def select_latest_snapshot(filenames: Iterable[str]) -> str | None:
    """Pick the lexicographically latest `.snapshot` filename.

    gt names snapshot files so that lexicographic order matches creation order.
    Files without the snapshot suffix are ignored.

    Returns:
        The latest snapshot filename, or None if there are no candidates
    """
    candidates = sorted(name for name in filenames if name.endswith(SNAPSHOT_SUFFIX))
    if not candidates:
        return None
    return candidates[-1]
