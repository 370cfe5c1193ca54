"""
JSONPath-based payload preprocessors.

A schema may declare its preprocessor as a JSONPath expression instead of
a function, which keeps YAML schema files free of code:

    preprocessor: "$.search"
"""

from __future__ import annotations

from typing import Any, Callable

from jsonpath_ng import parse as parse_jsonpath
from jsonpath_ng.exceptions import JsonPathParserError

from ..exceptions import SchemaError


def select_path(expression: str) -> Callable[[Any], Any]:
    """
    Build a preprocessor that selects the first JSONPath match.

    Args:
        expression: JSONPath expression, e.g. ``"$.page.contents"``

    Returns:
        Function returning the first matching value, or an empty dict when
        nothing matches.

    Raises:
        SchemaError: If the expression cannot be parsed
    """
    try:
        jsonpath_expr = parse_jsonpath(expression)
    except JsonPathParserError as e:
        raise SchemaError(f"Invalid JSONPath preprocessor {expression!r}: {e}") from e
    except Exception as e:
        raise SchemaError(
            f"Failed to parse JSONPath preprocessor {expression!r}: {type(e).__name__}: {e}"
        ) from e

    def preprocessor(data: Any) -> Any:
        matches = jsonpath_expr.find(data)
        if not matches:
            return {}
        return matches[0].value

    preprocessor.expression = expression  # type: ignore[attr-defined]
    return preprocessor
