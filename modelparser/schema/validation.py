"""
Schema validation for declarative parsing schemas.

This module checks raw schema definitions (as loaded from YAML, or written
as plain Python dicts) and reports errors with helpful messages, before
they are compiled into parsers.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from jsonpath_ng import parse as parse_jsonpath

from ..engine.converters import CONVERTERS
from .models import DESCRIPTOR_KEYS


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """Represents a single validation error with context."""
    path: str  # e.g., "schema[0].transform[1].field"
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        parts = [f"❌ {self.path}: {self.message}"]
        if self.value is not None:
            parts.append(f"   Got: {repr(self.value)}")
        if self.suggestion:
            parts.append(f"   💡 {self.suggestion}")
        return "\n".join(parts)


@dataclass
class ValidationResult:
    """Result of schema validation."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "✅ Schema validation passed"
        lines = [f"Schema validation failed with {len(self.errors)} error(s):\n"]
        lines.extend(str(e) for e in self.errors)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Schema Validator
# ─────────────────────────────────────────────────────────────────────────────

class SchemaValidator:
    """
    Validates a raw schema definition.

    Accepts a schema document (``{"version", "name", "preprocessor",
    "schema"}``) or a bare list of field descriptors.
    """

    REQUIRED_TOP_LEVEL = {"schema"}
    OPTIONAL_TOP_LEVEL = {"version", "name", "preprocessor"}
    NESTED_KEYS = {"schema", "preprocessor", "name"}
    VALID_CONVERTERS = set(CONVERTERS)

    def __init__(self, data: Any):
        self.data = data
        self.result = ValidationResult()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        if isinstance(self.data, list):
            self._validate_fields(self.data, "schema")
            return self.result

        if not isinstance(self.data, Mapping):
            self.result.add_error(
                "schema",
                "Must be a list of field descriptors or an object with a 'schema' list",
                value=type(self.data).__name__,
            )
            return self.result

        self._validate_top_level()
        if not self.result.is_valid:
            return self.result

        self._validate_version()
        self._validate_name()
        self._validate_preprocessor(self.data.get("preprocessor"), "preprocessor")
        self._validate_fields(self.data["schema"], "schema")

        return self.result

    def _validate_top_level(self) -> None:
        """Check required and unknown top-level keys."""
        keys = set(self.data.keys())
        missing = self.REQUIRED_TOP_LEVEL - keys
        unknown = keys - self.REQUIRED_TOP_LEVEL - self.OPTIONAL_TOP_LEVEL

        for key in missing:
            self.result.add_error(
                key,
                f"Required field '{key}' is missing",
                suggestion=f"Add '{key}:' with a list of field descriptors"
            )

        for key in unknown:
            self.result.add_error(
                key,
                f"Unknown top-level field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.REQUIRED_TOP_LEVEL | self.OPTIONAL_TOP_LEVEL))}"
            )

    def _validate_version(self) -> None:
        if "version" not in self.data:
            return
        version = self.data["version"]
        if not isinstance(version, int) or isinstance(version, bool):
            self.result.add_error(
                "version",
                "Must be an integer",
                value=version,
                suggestion="Use 'version: 1'"
            )
        elif version < 1:
            self.result.add_error(
                "version",
                "Must be >= 1",
                value=version
            )

    def _validate_name(self) -> None:
        if "name" not in self.data:
            return
        name = self.data["name"]
        if not isinstance(name, str):
            self.result.add_error(
                "name",
                "Must be a string",
                value=name
            )
        elif not name.strip():
            self.result.add_error(
                "name",
                "Cannot be empty",
                suggestion="Name the resource this schema parses"
            )

    def _validate_preprocessor(self, preprocessor: Any, path: str) -> None:
        if preprocessor is None or callable(preprocessor):
            return
        if not isinstance(preprocessor, str):
            self.result.add_error(
                path,
                "Must be a JSONPath string",
                value=preprocessor,
                suggestion="e.g. preprocessor: \"$.page\""
            )
            return
        try:
            parse_jsonpath(preprocessor)
        except Exception as e:
            self.result.add_error(
                path,
                f"Invalid JSONPath expression: {type(e).__name__}: {e}",
                value=preprocessor
            )

    def _validate_fields(self, fields: Any, path: str) -> None:
        if not isinstance(fields, list):
            self.result.add_error(
                path,
                "Must be a list of field descriptors",
                value=fields
            )
            return

        names: dict[str, int] = {}
        for i, descriptor in enumerate(fields):
            descriptor_path = f"{path}[{i}]"
            name = self._validate_descriptor(descriptor, descriptor_path)
            if name is None:
                continue
            if name in names:
                self.result.add_error(
                    descriptor_path,
                    f"Duplicate output name '{name}'",
                    suggestion=f"Already produced by {path}[{names[name]}]; set a distinct 'name'"
                )
            else:
                names[name] = i

    def _validate_descriptor(self, descriptor: Any, path: str) -> str | None:
        """Validate one descriptor and return its output name, if known."""
        if not isinstance(descriptor, Mapping):
            self.result.add_error(
                path,
                "Must be an object",
                value=descriptor
            )
            return None

        unknown = set(descriptor.keys()) - DESCRIPTOR_KEYS
        for key in sorted(unknown):
            self.result.add_error(
                f"{path}.{key}",
                f"Unknown field descriptor key '{key}'",
                suggestion=f"Valid keys are: {', '.join(sorted(DESCRIPTOR_KEYS))}"
            )

        field_value = descriptor.get("field")
        output_name = self._validate_field(field_value, f"{path}.field")

        name = descriptor.get("name")
        if name is not None:
            if not isinstance(name, str) or not name:
                self.result.add_error(
                    f"{path}.name",
                    "Must be a non-empty string",
                    value=name
                )
            else:
                output_name = name

        is_array = descriptor.get("is_array")
        if is_array is not None and not isinstance(is_array, bool):
            self.result.add_error(
                f"{path}.is_array",
                "Must be a boolean",
                value=is_array,
                suggestion="Use 'is_array: true'"
            )

        if "transform" in descriptor:
            self._validate_transform(descriptor["transform"], f"{path}.transform")

        construct = descriptor.get("construct_transform")
        if construct is not None and not callable(construct):
            self.result.add_error(
                f"{path}.construct_transform",
                "Must be callable",
                value=construct,
                suggestion="construct_transform can only be set from Python code"
            )

        return output_name

    def _validate_field(self, field_value: Any, path: str) -> str | None:
        if field_value is None:
            self.result.add_error(
                path,
                "Required field 'field' is missing",
                suggestion="Add 'field:' with the key to read from the payload"
            )
            return None

        segments = field_value if isinstance(field_value, (list, tuple)) else [field_value]
        if not segments:
            self.result.add_error(
                path,
                "Cannot be an empty list",
                value=field_value
            )
            return None
        for segment in segments:
            if not isinstance(segment, str) or not segment:
                self.result.add_error(
                    path,
                    "Path segments must be non-empty strings",
                    value=field_value
                )
                return None
        return segments[0]

    def _validate_transform(self, transform: Any, path: str) -> None:
        if transform is None or callable(transform):
            return

        if isinstance(transform, str):
            if transform not in self.VALID_CONVERTERS:
                self.result.add_error(
                    path,
                    f"Unknown converter '{transform}'",
                    value=transform,
                    suggestion=f"Valid converters: {', '.join(sorted(self.VALID_CONVERTERS))}"
                )
            return

        if isinstance(transform, list):
            self._validate_fields(transform, path)
            return

        if isinstance(transform, Mapping):
            if "schema" not in transform:
                self.result.add_error(
                    path,
                    "Nested schema object requires a 'schema' list",
                    value=transform
                )
                return
            for key in sorted(set(transform.keys()) - self.NESTED_KEYS):
                self.result.add_error(
                    f"{path}.{key}",
                    f"Unknown nested schema key '{key}'",
                    suggestion=f"Valid keys are: {', '.join(sorted(self.NESTED_KEYS))}"
                )
            self._validate_preprocessor(transform.get("preprocessor"), f"{path}.preprocessor")
            self._validate_fields(transform["schema"], f"{path}.schema")
            return

        self.result.add_error(
            path,
            "Invalid transform",
            value=transform,
            suggestion="Use a converter name, a list of field descriptors or {schema: [...]}"
        )


def validate_schema(data: Any) -> ValidationResult:
    """Validate a raw schema definition."""
    return SchemaValidator(data).validate()
