"""Dot/bracket path resolution into nested dicts and lists.

Paths look like ``contact.company.name`` or ``items[0].email``. ``[N]`` is
rewritten to ``.N`` before splitting, so list indices are plain digit
segments looked up the same way as mapping keys.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

_INDEX_PATTERN = re.compile(r"\[(\d+)\]")

_MISSING = object()


def normalize_path(path: str) -> list[str]:
    """Split a template path into segments.

    E.g., "items[0].name" → ["items", "0", "name"]

    Args:
        path: Dot/bracket path

    Returns:
        List of path segments
    """
    return _INDEX_PATTERN.sub(r".\1", path).split(".")


def _as_index(key: str) -> int | None:
    # ASCII only: str.isdigit() also accepts superscripts that int() rejects
    if key.isascii() and key.isdigit():
        return int(key)
    return None


def _child(current: Any, key: str) -> Any:
    """Look up one segment, returning _MISSING when it cannot be followed."""
    index = _as_index(key)

    if isinstance(current, Mapping):
        if key in current:
            return current[key]
        # Mappings keyed by int (e.g. step order) are addressed with digits too
        if index is not None and index in current:
            return current[index]
        return _MISSING

    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        if index is not None and index < len(current):
            return current[index]
        return _MISSING

    return _MISSING


def get_nested_value(root: Any, path: str) -> Any:
    """Get a nested value using dot notation.

    Never raises for missing data: any absent key, out-of-range index,
    ``None`` or scalar along the way resolves to ``None``.

    Args:
        root: Dict/list structure to read from
        path: Dot/bracket path (e.g., "contact.email" or "items[0].name")

    Returns:
        The value at the path, or None if not found
    """
    current = root
    for key in normalize_path(path):
        if current is None:
            return None
        current = _child(current, key)
        if current is _MISSING:
            return None
    return current


def has_nested_value(root: Any, path: str) -> bool:
    """Check whether a path exists, even when it holds None.

    Args:
        root: Dict/list structure to read from
        path: Dot/bracket path

    Returns:
        True if every segment of the path can be followed
    """
    current = root
    for key in normalize_path(path):
        if current is None:
            return False
        current = _child(current, key)
        if current is _MISSING:
            return False
    return True


def set_nested_value(root: dict[str, Any], path: str, value: Any) -> None:
    """Set a nested value using dot notation, creating dicts as needed.

    Intermediate nodes that are missing or not dicts are replaced with
    empty dicts. Mutates ``root`` in place.

    Args:
        root: Dict to write into
        path: Dot/bracket path
        value: Value to assign at the final key
    """
    keys = normalize_path(path)
    current = root

    for key in keys[:-1]:
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]

    current[keys[-1]] = value
