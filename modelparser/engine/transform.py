"""
Transform resolution.

A transform specification is resolved into a Transform once, so parsing a
field only has to switch on ``Transform.kind``.
"""

from __future__ import annotations

from typing import Any

from ..exceptions import InvalidTransformError
from ..schema.models import Schema, Transform, TransformKind
from .converters import CONVERTERS
from .tracker import ParseContext


def resolve_transform(spec: Any) -> Transform | None:
    """
    Resolve a transform specification.

    Args:
        spec: None, a converter name, a callable, a nested schema (list,
            Schema, ``{"preprocessor", "schema"}`` mapping or compiled
            ModelParser) or an already resolved Transform

    Returns:
        The resolved Transform, or None when ``spec`` is None

    Raises:
        InvalidTransformError: For unknown converter names and any other
            kind of value
    """
    if spec is None or isinstance(spec, Transform):
        return spec

    if isinstance(spec, str):
        converter = CONVERTERS.get(spec)
        if converter is None:
            raise InvalidTransformError(
                spec, f"unknown converter, expected one of {', '.join(sorted(CONVERTERS))}"
            )
        return Transform(TransformKind.CONVERTER, converter, label=spec)

    from .parser import ModelParser, ParserOptions

    if isinstance(spec, ModelParser):
        nested = spec
        if nested.options.track_unparsed:
            nested = ModelParser(nested.schema, ParserOptions(track_unparsed=False))
        return Transform(TransformKind.SCHEMA, nested, label=nested.schema.name or "schema")

    if Schema.is_schema_spec(spec):
        nested = ModelParser(Schema.coerce(spec), ParserOptions(track_unparsed=False))
        return Transform(TransformKind.SCHEMA, nested, label=nested.schema.name or "schema")

    if callable(spec):
        return Transform(TransformKind.FUNCTION, spec, label=getattr(spec, "__name__", repr(spec)))

    raise InvalidTransformError(spec)


def apply_transform(
    value: Any,
    transform: Any,
    context: ParseContext | None = None,
) -> Any:
    """
    Apply a transform (resolved or not) to one value.

    Nested schemas are parsed with ``context`` so their reads are tracked
    relative to the value's position in the top-level payload.
    """
    resolved = resolve_transform(transform)
    if resolved is None:
        return value
    if resolved.kind == TransformKind.SCHEMA:
        return resolved.target.parse_nested(value, context or ParseContext())
    return resolved.target(value)
