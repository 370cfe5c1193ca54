"""
Field parser and parser factory.

This module applies schemas to payloads. ``create_parser`` compiles a
schema into a reusable ModelParser; calling the parser on a payload runs
every field descriptor through ``parse_field`` and returns the assembled
dict.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, MutableMapping

from ..exceptions import DuplicateFieldError, PayloadError, SchemaError
from ..schema.models import FieldDescriptor, Schema, SchemaSpec, Transform
from .accessor import force_array, get_value, is_valid
from .diagnostics import UNPARSED_EVENT, DiagnosticSink, publish
from .tracker import AccessTracker, ParseContext
from .transform import apply_transform, resolve_transform

logger = logging.getLogger(__name__)

# Key under which unparsed properties are attached to a parse result
UNPARSED_KEY = "__unparsed__"

_UNRESOLVED = object()


@dataclass
class ParserOptions:
    """
    Options for a compiled parser.

    Attributes:
        track_unparsed: Compute unparsed properties, attach them to the
            result and publish them. Nested schemas always run without.
        sink: Receives ``(event_name, payload)`` when unparsed properties
            are found
        event_name: Name used when publishing
    """
    track_unparsed: bool = True
    sink: DiagnosticSink | None = None
    event_name: str = UNPARSED_EVENT


def parse_field(
    data: Any,
    parsed: MutableMapping[str, Any],
    descriptor: FieldDescriptor | Mapping[str, Any],
    transform: Any = _UNRESOLVED,
    context: ParseContext | None = None,
) -> None:
    """
    Apply one field descriptor to ``data``, writing into ``parsed``.

    Args:
        data: The (preprocessed) input mapping
        parsed: Output mapping under construction
        descriptor: The field descriptor
        transform: Pre-resolved transform for ``descriptor``; resolved from
            the descriptor when omitted
        context: Parse state for unparsed-property tracking

    Raises:
        PayloadError: If ``data`` is not a mapping
        DuplicateFieldError: If the output key is already present
    """
    if not isinstance(data, Mapping):
        raise PayloadError(f"Cannot parse a non-object: {type(data).__name__}")

    descriptor = FieldDescriptor.coerce(descriptor)
    context = context or ParseContext()
    if transform is _UNRESOLVED:
        transform = resolve_transform(descriptor.transform)

    path = descriptor.path
    value = get_value(data, path)
    replaced = False

    if descriptor.construct_transform is not None:
        constructed = descriptor.construct_transform(value)
        if isinstance(constructed, tuple):
            constructed, new_value = constructed
            replaced = new_value is not value
            value = new_value
        transform = resolve_transform(constructed)

    # Reads feeding a nested schema are recorded by the nested parse itself
    nested = isinstance(transform, Transform) and transform.is_schema
    context.record(
        path,
        consumed=not nested or replaced or transform.target.schema.preprocessor is not None,
    )

    raw = value
    if descriptor.is_array:
        value = force_array(value)

    if transform is not None and (is_valid(value) or transform.is_function):
        if descriptor.is_array:
            if isinstance(raw, list):
                value = [
                    apply_transform(item, transform, context.descend(*path, index))
                    for index, item in enumerate(value)
                ]
            else:
                value = [apply_transform(item, transform, context.descend(*path)) for item in value]
        else:
            value = apply_transform(value, transform, context.descend(*path))

    name = descriptor.key
    if name in parsed:
        raise DuplicateFieldError(name)
    if is_valid(value):
        parsed[name] = value


class ModelParser:
    """
    A compiled schema.

    Example:
        parser = create_parser([
            {"field": "@id", "name": "id", "transform": "number"},
            {"field": "title"},
        ])
        parser({"@id": "4", "title": "Home"})  # -> {"id": 4, "title": "Home"}
    """

    def __init__(self, schema: SchemaSpec, options: ParserOptions | None = None):
        self.schema = Schema.coerce(schema)
        self.options = options or ParserOptions()
        if self.options.track_unparsed and any(d.key == UNPARSED_KEY for d in self.schema.fields):
            raise SchemaError(
                f"Output key \"{UNPARSED_KEY}\" is reserved for unparsed properties"
            )
        self._compiled: list[tuple[FieldDescriptor, Transform | None]] = [
            (descriptor, resolve_transform(descriptor.transform))
            for descriptor in self.schema.fields
        ]

    def __repr__(self) -> str:
        name = self.schema.name or "anonymous"
        return f"<ModelParser {name} fields={len(self._compiled)}>"

    def __call__(self, payload: Any) -> dict[str, Any]:
        """
        Parse a raw payload.

        Args:
            payload: Decoded JSON data, a JSON string/bytes, or "" for no body

        Returns:
            The parsed dict. Unparsed properties, if any and if tracking is
            on, are attached under UNPARSED_KEY.
        """
        if isinstance(payload, (str, bytes, bytearray)) and not payload:
            return {}
        payload = _decode(payload)
        data = self._preprocess(payload)

        if not self.options.track_unparsed:
            return self._parse_fields(data, ParseContext())

        tracker = AccessTracker(data)
        parsed = self._parse_fields(data, ParseContext(tracker))
        unparsed = tracker.unparsed()
        if unparsed:
            logger.debug(
                "%r left %d top-level propert%s unparsed",
                self,
                len(unparsed),
                "y" if len(unparsed) == 1 else "ies",
            )
            parsed[UNPARSED_KEY] = unparsed
            publish(
                self.options.sink,
                self.options.event_name,
                {"unparsed_properties": unparsed, "raw_payload": copy.deepcopy(payload)},
            )
        return parsed

    def parse_nested(self, value: Any, context: ParseContext) -> dict[str, Any]:
        """Parse a value reached through a nested-schema transform."""
        if isinstance(value, str) and not value:
            return {}
        return self._parse_fields(self._preprocess(value), context)

    def _preprocess(self, data: Any) -> Any:
        if self.schema.preprocessor is None:
            return data
        return self.schema.preprocessor(data)

    def _parse_fields(self, data: Any, context: ParseContext) -> dict[str, Any]:
        parsed: dict[str, Any] = {}
        for descriptor, transform in self._compiled:
            parse_field(data, parsed, descriptor, transform, context)
        return parsed


def create_parser(schema: SchemaSpec, options: ParserOptions | None = None) -> ModelParser:
    """
    Compile ``schema`` into a reusable parse function.

    Schema-authoring mistakes in descriptors and static transforms
    (missing ``field``, unknown converter names, invalid transform values,
    a top-level output key colliding with UNPARSED_KEY) raise here rather
    than on first use.
    """
    parser = ModelParser(schema, options)
    logger.debug("Created %r", parser)
    return parser


def _decode(payload: Any) -> Any:
    """Decode JSON text payloads; anything else is passed through."""
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PayloadError(f"Payload is not valid UTF-8: {e}") from e
    if isinstance(payload, str):
        try:
            return json.loads(payload)
        except json.JSONDecodeError as e:
            raise PayloadError(f"Payload is not valid JSON: {e}") from e
    return payload
