"""
Diagnostic event sinks.

A parser publishes an event when a payload contains properties its schema
never read. Who listens is up to the caller: pass any callable accepting
``(event_name, payload)`` as the sink.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

logger = logging.getLogger(__name__)

UNPARSED_EVENT = "modelparser:unparsed-properties"


class DiagnosticSink(Protocol):
    """Anything callable as ``sink(event_name, payload)``."""

    def __call__(self, event_name: str, payload: dict[str, Any]) -> None:
        ...


@dataclass
class DiagnosticEvent:
    """A single published diagnostic."""
    name: str
    payload: dict[str, Any]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def unparsed_properties(self) -> dict[Any, Any]:
        return self.payload.get("unparsed_properties", {})


class CollectingSink:
    """
    Sink that keeps every event in memory.

    Example:
        sink = CollectingSink()
        parser = create_parser(schema, ParserOptions(sink=sink))
        parser(payload)
        for event in sink.events:
            print(event.name, event.unparsed_properties)
    """

    def __init__(self) -> None:
        self.events: list[DiagnosticEvent] = []

    def __call__(self, event_name: str, payload: dict[str, Any]) -> None:
        self.events.append(DiagnosticEvent(name=event_name, payload=payload))

    def clear(self) -> None:
        self.events.clear()


class LoggingSink:
    """Sink that writes each event to a logger."""

    def __init__(self, level: int = logging.INFO, log: logging.Logger | None = None):
        self.level = level
        self.log = log or logger

    def __call__(self, event_name: str, payload: dict[str, Any]) -> None:
        unparsed = payload.get("unparsed_properties", {})
        self.log.log(
            self.level,
            "%s: %d unparsed top-level propert%s: %s",
            event_name,
            len(unparsed),
            "y" if len(unparsed) == 1 else "ies",
            ", ".join(str(key) for key in unparsed),
        )


def publish(sink: DiagnosticSink | None, event_name: str, payload: dict[str, Any]) -> None:
    """
    Deliver an event to ``sink``.

    Delivery is best-effort: a failing sink is logged and the parse that
    produced the event carries on.
    """
    if sink is None:
        return
    try:
        sink(event_name, payload)
    except Exception:
        logger.exception("Diagnostic sink %r failed handling %s", sink, event_name)
