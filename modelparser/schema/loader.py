"""
Schema loader for declarative parsing schemas.

This module provides the public API for loading and validating schema
documents from disk or YAML strings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .models import Schema
from .validation import SchemaValidator, ValidationResult

logger = logging.getLogger(__name__)


def load_schema(path: str | Path) -> tuple[Schema | None, ValidationResult]:
    """
    Load and validate a schema from a YAML file.

    Args:
        path: Path to the YAML schema file

    Returns:
        Tuple of (Schema or None, ValidationResult)
        If validation fails, Schema will be None.

    Example:
        schema, result = load_schema("schemas/search.yaml")
        if not result.is_valid:
            print(result)
            sys.exit(1)
        parser = create_parser(schema)
    """
    path = Path(path)

    if not path.exists():
        result = ValidationResult()
        result.add_error(
            str(path),
            "File not found",
            suggestion="Check the file path is correct"
        )
        return None, result

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error(
            str(path),
            f"Invalid YAML syntax: {e}",
            suggestion="Check YAML formatting (indentation, colons, etc.)"
        )
        return None, result

    schema, result = build_schema(data, source=str(path))
    if schema is not None and schema.name is None:
        schema.name = path.stem
    return schema, result


def load_schema_yaml(yaml_string: str) -> tuple[Schema | None, ValidationResult]:
    """
    Validate and build a schema from a YAML string (useful for testing).

    Args:
        yaml_string: YAML content as a string

    Returns:
        Tuple of (Schema or None, ValidationResult)
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error("yaml", f"Invalid YAML syntax: {e}")
        return None, result

    return build_schema(data, source="yaml")


def build_schema(data: Any, source: str = "schema") -> tuple[Schema | None, ValidationResult]:
    """
    Validate an already-loaded schema definition and build a Schema.

    Args:
        data: A schema document mapping or a bare list of field descriptors
        source: Label used in log messages

    Returns:
        Tuple of (Schema or None, ValidationResult)
    """
    if not isinstance(data, (dict, list)):
        result = ValidationResult()
        result.add_error(
            source,
            "Content must be a YAML object or list",
            value=type(data).__name__
        )
        return None, result

    result = SchemaValidator(data).validate()
    if not result.is_valid:
        logger.warning("Schema %s failed validation with %d error(s)", source, len(result.errors))
        return None, result

    schema = Schema.coerce(data)
    logger.debug("Loaded schema %s (%d field(s))", source, len(schema.fields))
    return schema, result
