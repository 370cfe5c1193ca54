"""
Structural lookups on XML-derived JSON data.

The XML-to-JSON bridge that produces our payloads has two quirks this
module smooths over:

- A leaf element may arrive as ``"title": "text"`` or, when it carries
  attributes, as ``"title": {"#text": "text", "@lang": "en"}``.
- An element that appears once is a bare object, one that repeats is a
  list of objects.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

TEXT_NODE = "#text"


def is_valid(value: Any) -> bool:
    """Return True for any value that should be emitted (everything but None)."""
    return value is not None


def force_array(value: Any) -> list[Any]:
    """
    Normalize a "scalar or list" value into a list.

    Absent values and the empty string become ``[]``. Lists are returned
    as-is (same object). Anything else is wrapped in a one-element list.
    """
    if not is_valid(value) or value == "":
        return []
    if isinstance(value, list):
        return value
    return [value]


def get_value(obj: Any, path: Sequence[str]) -> Any:
    """
    Resolve ``path`` against nested mappings.

    Args:
        obj: Root value to descend into
        path: Ordered key segments

    Returns:
        The value found, or None if any step is missing or not a mapping.

    Example:
        get_value({"a": {"b": "text"}}, ["a", "b", "#text"])  # -> "text"
    """
    current = obj
    for index, segment in enumerate(path):
        if not isinstance(current, Mapping) or segment not in current:
            return None
        current = current[segment]
        remaining = len(path) - index - 1
        if remaining == 1 and path[-1] == TEXT_NODE and isinstance(current, str):
            return current
    return current
