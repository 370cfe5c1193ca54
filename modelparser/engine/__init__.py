"""
Declarative model-parsing engine.

Turns loosely-typed, XML-derived JSON into normalized dicts following a
schema of field descriptors.

Usage:
    from modelparser.engine import create_parser, ParserOptions, CollectingSink

    sink = CollectingSink()
    parser = create_parser(
        [
            {"field": "@id", "name": "id", "transform": "number"},
            {"field": "tag", "name": "tags", "is_array": True},
        ],
        ParserOptions(sink=sink),
    )
    parser({"@id": "12", "tag": "news", "extra": "x"})
    # -> {"id": 12, "tags": ["news"], "__unparsed__": {"extra": "x"}}
"""

# Lookups
from .accessor import TEXT_NODE, force_array, get_value, is_valid

# Converters
from .converters import CONVERTERS, convert

# Diagnostics
from .diagnostics import (
    UNPARSED_EVENT,
    CollectingSink,
    DiagnosticEvent,
    DiagnosticSink,
    LoggingSink,
)

# Parsing
from .parser import UNPARSED_KEY, ModelParser, ParserOptions, create_parser, parse_field
from .tracker import AccessTracker, ParseContext
from .transform import apply_transform, resolve_transform

__all__ = [
    # Lookups
    "TEXT_NODE",
    "force_array",
    "get_value",
    "is_valid",
    # Converters
    "CONVERTERS",
    "convert",
    # Diagnostics
    "UNPARSED_EVENT",
    "CollectingSink",
    "DiagnosticEvent",
    "DiagnosticSink",
    "LoggingSink",
    # Parsing
    "UNPARSED_KEY",
    "ModelParser",
    "ParserOptions",
    "create_parser",
    "parse_field",
    "AccessTracker",
    "ParseContext",
    "apply_transform",
    "resolve_transform",
]
