"""
Access tracking for unparsed-property detection.

An AccessTracker remembers every path read while a payload is parsed and
can afterwards report the parts of the payload nobody looked at. Those
leftovers usually mean the server started sending something the schema
does not know about yet.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Hashable


@dataclass
class _PathNode:
    """One node of the trie of read paths."""
    children: dict[Hashable, _PathNode] = field(default_factory=dict)
    consumed: bool = False  # the whole subtree was handed on

    def child(self, segment: Hashable) -> _PathNode:
        node = self.children.get(segment)
        if node is None:
            node = self.children[segment] = _PathNode()
        return node


class AccessTracker:
    """
    Records read paths for one top-level parse of ``data``.

    Example:
        tracker = AccessTracker({"ok": True, "fail": False})
        tracker.record(["ok"])
        tracker.unparsed()  # -> {"fail": False}
    """

    def __init__(self, data: Any):
        self.data = data
        self._root = _PathNode()

    def record(self, path: Sequence[Hashable], consumed: bool = True) -> None:
        """
        Mark ``path`` as read.

        Args:
            path: Absolute path from the payload root (list indices included)
            consumed: True when the value at ``path`` was used wholesale.
                False when only some of its children were read, which the
                nested reads record themselves.
        """
        node = self._root
        for segment in path:
            node = node.child(segment)
        if consumed:
            node.consumed = True

    def unparsed(self) -> dict[Hashable, Any]:
        """
        Return everything in ``data`` that was never read.

        The result mirrors the payload structure; lists are represented as
        dicts keyed by element index so positions are kept.
        """
        return _collect(self.data, self._root) or {}


def _collect(value: Any, node: _PathNode) -> dict[Hashable, Any] | None:
    if node.consumed:
        return None

    if isinstance(value, Mapping):
        entries = value.items()
    elif isinstance(value, list):
        entries = enumerate(value)
    else:
        # A scalar that was looked at counts as read
        return None

    leftovers: dict[Hashable, Any] = {}
    for key, child_value in entries:
        child = node.children.get(key)
        if child is None:
            leftovers[key] = child_value
            continue
        nested = _collect(child_value, child)
        if nested:
            leftovers[key] = nested
    return leftovers


@dataclass(frozen=True)
class ParseContext:
    """
    Per-invocation parse state.

    Carries the optional tracker and the absolute path of the value the
    current (possibly nested) schema is being applied to.
    """
    tracker: AccessTracker | None = None
    prefix: tuple[Hashable, ...] = ()

    @property
    def tracking(self) -> bool:
        return self.tracker is not None

    def descend(self, *segments: Hashable) -> ParseContext:
        """Context for a nested parse of the value at ``segments``."""
        if self.tracker is None:
            return self
        return ParseContext(self.tracker, self.prefix + segments)

    def record(self, path: Sequence[Hashable], consumed: bool = True) -> None:
        if self.tracker is not None:
            self.tracker.record(self.prefix + tuple(path), consumed=consumed)
