"""
Typed data structures for parsing schemas.

This module contains the dataclasses that describe a schema (field
descriptors and the schema wrapper) and the compiled form of a
transform specification.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Any, Callable, Union

from ..exceptions import MissingFieldError, SchemaError
from .preprocessors import select_path

# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────


class TransformKind(str, Enum):
    """Kinds of transform a field descriptor can carry."""
    CONVERTER = "converter"  # named primitive converter, e.g. "number"
    FUNCTION = "function"  # plain callable
    SCHEMA = "schema"  # nested schema


# ─────────────────────────────────────────────────────────────────────────────
# Field Descriptor
# ─────────────────────────────────────────────────────────────────────────────

DESCRIPTOR_KEYS = frozenset({"field", "name", "is_array", "transform", "construct_transform"})


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Describes how to produce one output property.

    Attributes:
        field: Key, or sequence of keys, locating the value in the input
        name: Output key (defaults to the first path segment)
        is_array: Coerce the value to a list and transform element-wise
        transform: Converter name, callable, nested schema or
            ``{"preprocessor", "schema"}`` mapping
        construct_transform: Callable of the raw value returning the
            transform to use, or a ``(transform, value)`` tuple
    """
    field: str | tuple[str, ...]
    name: str | None = None
    is_array: bool = False
    transform: Any = None
    construct_transform: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        field_value = self.field
        if isinstance(field_value, list):
            field_value = tuple(field_value)
            object.__setattr__(self, "field", field_value)
        if field_value is None or field_value == "" or field_value == ():
            raise MissingFieldError(self)

    @property
    def path(self) -> tuple[str, ...]:
        """The field as a tuple of path segments."""
        if isinstance(self.field, tuple):
            return self.field
        return (self.field,)

    @property
    def key(self) -> str:
        """The output key this descriptor writes."""
        return self.name or self.path[0]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FieldDescriptor:
        """Build a descriptor from a plain mapping."""
        if "field" not in data:
            raise MissingFieldError(dict(data))
        unknown = set(data) - DESCRIPTOR_KEYS
        if unknown:
            raise SchemaError(
                f"Unknown field descriptor key(s) {', '.join(sorted(unknown))} in {dict(data)!r}"
            )
        return cls(
            field=data["field"],
            name=data.get("name"),
            is_array=bool(data.get("is_array", False)),
            transform=data.get("transform"),
            construct_transform=data.get("construct_transform"),
        )

    @classmethod
    def coerce(cls, value: FieldDescriptor | Mapping[str, Any]) -> FieldDescriptor:
        if isinstance(value, FieldDescriptor):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        raise SchemaError(f"Field descriptor must be a mapping, got {type(value).__name__}")


# ─────────────────────────────────────────────────────────────────────────────
# Schema
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class Schema:
    """An ordered list of field descriptors with an optional preprocessor."""
    fields: list[FieldDescriptor] = dataclass_field(default_factory=list)
    preprocessor: Callable[[Any], Any] | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        self.fields = [FieldDescriptor.coerce(d) for d in self.fields]
        if isinstance(self.preprocessor, str):
            self.preprocessor = select_path(self.preprocessor)
        elif self.preprocessor is not None and not callable(self.preprocessor):
            raise SchemaError(
                f"Preprocessor must be callable or a JSONPath string, got {self.preprocessor!r}"
            )

    @classmethod
    def coerce(cls, value: SchemaSpec) -> Schema:
        """
        Accept any of the schema spellings.

        - a Schema
        - a list of descriptors (dicts or FieldDescriptor)
        - a mapping ``{"schema": [...], "preprocessor": ..., "name": ...}``
        """
        if isinstance(value, Schema):
            return value
        if isinstance(value, list):
            return cls(fields=list(value))
        if isinstance(value, Mapping) and "schema" in value:
            fields = value["schema"]
            if not isinstance(fields, list):
                raise SchemaError(f"'schema' must be a list of field descriptors, got {fields!r}")
            return cls(
                fields=list(fields),
                preprocessor=value.get("preprocessor"),
                name=value.get("name"),
            )
        raise SchemaError(f"Cannot build a schema from {value!r}")

    @staticmethod
    def is_schema_spec(value: Any) -> bool:
        """True if ``value`` is spelled like a schema."""
        return (
            isinstance(value, (Schema, list))
            or (isinstance(value, Mapping) and "schema" in value)
        )


SchemaSpec = Union[Schema, list, Mapping[str, Any]]


# ─────────────────────────────────────────────────────────────────────────────
# Compiled transform
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Transform:
    """
    A resolved transform specification.

    ``target`` is the converter function for CONVERTER, the user callable
    for FUNCTION and the compiled nested ModelParser for SCHEMA.
    """
    kind: TransformKind
    target: Any
    label: str = ""

    @property
    def is_function(self) -> bool:
        return self.kind == TransformKind.FUNCTION

    @property
    def is_schema(self) -> bool:
        return self.kind == TransformKind.SCHEMA
