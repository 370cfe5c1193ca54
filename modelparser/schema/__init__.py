"""
Parsing Schemas

This package provides the schema data model plus tools for loading and
validating schemas written as YAML documents.

Usage:
    from modelparser.schema import load_schema, load_schema_yaml

    # Load from file
    schema, result = load_schema("schemas/search.yaml")
    if not result.is_valid:
        print(result)

    # Or validate from string
    schema, result = load_schema_yaml(yaml_string)
"""

# Public API
from .loader import build_schema, load_schema, load_schema_yaml

# Models (for type hints and isinstance checks)
from .models import FieldDescriptor, Schema, SchemaSpec, Transform, TransformKind

# Preprocessors
from .preprocessors import select_path

# Validation (for custom validation if needed)
from .validation import SchemaValidator, ValidationError, ValidationResult, validate_schema

__all__ = [
    # Loader functions
    "build_schema",
    "load_schema",
    "load_schema_yaml",
    # Models
    "FieldDescriptor",
    "Schema",
    "SchemaSpec",
    "Transform",
    "TransformKind",
    # Preprocessors
    "select_path",
    # Validation
    "ValidationResult",
    "ValidationError",
    "SchemaValidator",
    "validate_schema",
]
