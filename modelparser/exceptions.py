"""
exceptions.py

Typed exception hierarchy raised by the model-parsing engine.
"""

from __future__ import annotations

from typing import Any

# ─────────────────────────────────────────────────────────────────────────────
# Base hierarchy
# ─────────────────────────────────────────────────────────────────────────────


class ModelParserError(Exception):
    """
    Root of all errors raised by this package.
    """


class SchemaError(ModelParserError):
    """
    Raised when a schema definition is malformed.

    These are programming mistakes in the schema itself and are never
    swallowed by the engine.
    """


class MissingFieldError(SchemaError):
    """Raised when a field descriptor does not declare ``field``."""

    def __init__(self, descriptor: Any):
        self.descriptor = descriptor
        super().__init__(f"Field descriptor is missing 'field': {descriptor!r}")


class DuplicateFieldError(SchemaError):
    """Raised when two descriptors of one schema produce the same output key."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Duplicate "{name}" in parsing model')


class InvalidTransformError(SchemaError):
    """Raised when a transform specification cannot be resolved."""

    def __init__(self, transform: Any, reason: str | None = None):
        self.transform = transform
        message = f"Invalid transform: {transform!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


# ─────────────────────────────────────────────────────────────────────────────
# Data errors
# ─────────────────────────────────────────────────────────────────────────────


class ConversionError(ModelParserError, ValueError):
    """
    Raised by a primitive converter when a value cannot be converted.

    Examples
    --------
    * ``number("55-55")``
    * ``date("")``
    """

    def __init__(self, converter: str, value: Any, reason: str | None = None):
        self.converter = converter
        self.value = value
        message = f"Failed converting {value!r} to {converter}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PayloadError(ModelParserError, TypeError):
    """
    Raised when the data handed to a parser is not something it can read.

    Distinguishes a malformed payload (a list or a scalar where an object
    was expected, undecodable JSON) from ordinary field-level absence.
    """
