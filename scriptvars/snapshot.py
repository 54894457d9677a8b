"""Snapshot persistence for the overlay store.

The overlay store written through ``VariableResolver.set`` outlives a single
run by being saved to a JSON snapshot file and read back at the start of the
next one.

Supported Types
--------------
- Primitives: int, str, finite float, bool, None
- Collections: list, tuple (saved as list), dict with string keys

Filtered Types (skipped with a warning)
---------------------------------------
- NaN and infinite floats
- Functions, classes, modules
- File handles and other I/O objects
- Any entry with a non-serializable value nested inside it

Usage:
    >>> from scriptvars.snapshot import load_snapshot, save_snapshot
    >>> written = save_snapshot(".snapshot.json", {"token": "abc", "retries": 3})
    >>> load_snapshot(".snapshot.json")
    {'token': 'abc', 'retries': 3}
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from scriptvars.core.errors import SnapshotFileError
from scriptvars.core.logging import ResolverLogger

# Default filename for the snapshot in the working directory
SNAPSHOT_FILENAME = ".snapshot.json"

_PRIMITIVE_TYPES = (str, int, float, bool, type(None))


def is_serializable(obj: Any) -> bool:
    """Check if object can be written to the snapshot file unchanged.

    Containers are checked recursively; dict keys must be strings.
    NaN and infinities are rejected since JSON has no tokens for them.

    Examples:
        >>> is_serializable({"ids": [1, 2, 3]})
        True
        >>> is_serializable(lambda x: x)
        False
        >>> is_serializable({1: "a"})
        False
    """
    if isinstance(obj, float):
        return math.isfinite(obj)
    if isinstance(obj, _PRIMITIVE_TYPES):
        return True
    if isinstance(obj, (list, tuple)):
        return all(is_serializable(item) for item in obj)
    if isinstance(obj, dict):
        return all(isinstance(k, str) and is_serializable(v) for k, v in obj.items())
    return False


def filter_serializable(
    data: dict[str, Any], logger: ResolverLogger | None = None
) -> dict[str, Any]:
    """Return the entries of *data* that can be persisted.

    Args:
        data: Overlay store contents
        logger: Optional ResolverLogger; each skipped entry is reported

    Returns:
        dict: Serializable key-value pairs, in original order
    """
    filtered = {}
    for key, value in data.items():
        if is_serializable(value):
            filtered[key] = value
        elif logger is not None:
            logger.log_snapshot_value_skipped(key, type(value).__name__)
    return filtered


def load_snapshot(
    path: str | Path = SNAPSHOT_FILENAME, logger: ResolverLogger | None = None
) -> dict[str, Any]:
    """Read the overlay store saved by a previous run.

    Args:
        path: Snapshot file path. A missing file yields an empty dict.
        logger: Optional ResolverLogger

    Returns:
        dict: Restored overlay entries

    Raises:
        SnapshotFileError: If the file cannot be read, is not valid JSON,
                           or its top level is not an object
    """
    snapshot_path = Path(path)
    if not snapshot_path.exists():
        return {}

    try:
        content = snapshot_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotFileError(snapshot_path, str(e)) from e

    if not content.strip():
        return {}

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise SnapshotFileError(snapshot_path, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotFileError(snapshot_path, "top level must be a JSON object")

    if logger is not None:
        logger.log_snapshot_loaded(str(snapshot_path), len(data))
    return data


def save_snapshot(
    path: str | Path, data: dict[str, Any], logger: ResolverLogger | None = None
) -> dict[str, Any]:
    """Write the serializable part of the overlay store to *path*.

    Parent directories are created as needed.

    Args:
        path: Snapshot file path
        data: Overlay store contents
        logger: Optional ResolverLogger

    Returns:
        dict: The entries actually written

    Raises:
        SnapshotFileError: If the file cannot be written
    """
    snapshot_path = Path(path)
    persisted = filter_serializable(data, logger)

    try:
        snapshot_path.parent.mkdir(parents=True, exist_ok=True)
        snapshot_path.write_text(json.dumps(persisted, indent=2, allow_nan=False), encoding="utf-8")
    except OSError as e:
        raise SnapshotFileError(snapshot_path, str(e)) from e

    if logger is not None:
        logger.log_snapshot_saved(str(snapshot_path), len(persisted))
    return persisted
