"""
modelparser - Declarative model parsing for XML-derived JSON

This package converts loosely-typed API payloads (``@attributes``,
``#text`` nodes, single-or-list children) into normalized dicts, driven
by declarative schemas instead of per-resource code.

Subpackages:
    - engine: Value lookup, converters, field parser and parser factory
    - schema: Schema data model, validation and YAML loading

Usage:
    from modelparser import create_parser, ParserOptions, LoggingSink

    page_schema = [
        {"field": "@id", "name": "id", "transform": "number"},
        {"field": "title"},
        {"field": "date.modified", "name": "dateModified", "transform": "date"},
        {"field": "tag", "name": "tags", "is_array": True},
    ]
    parser = create_parser(page_schema, ParserOptions(sink=LoggingSink()))
    page = parser(response_body)

    # Or from a YAML schema file
    schema, result = load_schema("schemas/page.yaml")
    if result.is_valid:
        page = create_parser(schema)(response_body)
"""

__version__ = "0.1.0"

# Re-export schema for convenience
from .schema import (
    # Loader functions
    build_schema,
    load_schema,
    load_schema_yaml,
    # Models
    FieldDescriptor,
    Schema,
    Transform,
    TransformKind,
    # Preprocessors
    select_path,
    # Validation
    ValidationResult,
    ValidationError,
    SchemaValidator,
    validate_schema,
)

# Re-export engine for convenience
from .engine import (
    # Lookups
    TEXT_NODE,
    force_array,
    get_value,
    is_valid,
    # Converters
    CONVERTERS,
    convert,
    # Diagnostics
    UNPARSED_EVENT,
    CollectingSink,
    DiagnosticEvent,
    DiagnosticSink,
    LoggingSink,
    # Parsing
    UNPARSED_KEY,
    ModelParser,
    ParserOptions,
    create_parser,
    parse_field,
    apply_transform,
    resolve_transform,
)

# Errors
from .exceptions import (
    ConversionError,
    DuplicateFieldError,
    InvalidTransformError,
    MissingFieldError,
    ModelParserError,
    PayloadError,
    SchemaError,
)

__all__ = [
    # Package info
    "__version__",
    # Schema - Loader functions
    "build_schema",
    "load_schema",
    "load_schema_yaml",
    # Schema - Models
    "FieldDescriptor",
    "Schema",
    "Transform",
    "TransformKind",
    "select_path",
    # Schema - Validation
    "ValidationResult",
    "ValidationError",
    "SchemaValidator",
    "validate_schema",
    # Engine - Lookups
    "TEXT_NODE",
    "force_array",
    "get_value",
    "is_valid",
    # Engine - Converters
    "CONVERTERS",
    "convert",
    # Engine - Diagnostics
    "UNPARSED_EVENT",
    "CollectingSink",
    "DiagnosticEvent",
    "DiagnosticSink",
    "LoggingSink",
    # Engine - Parsing
    "UNPARSED_KEY",
    "ModelParser",
    "ParserOptions",
    "create_parser",
    "parse_field",
    "apply_transform",
    "resolve_transform",
    # Errors
    "ModelParserError",
    "SchemaError",
    "MissingFieldError",
    "DuplicateFieldError",
    "InvalidTransformError",
    "ConversionError",
    "PayloadError",
]
