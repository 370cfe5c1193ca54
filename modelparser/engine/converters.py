"""
Primitive converters for string values coming off the wire.

Every converter takes one value and returns the converted value. All of
them except ``boolean`` raise ConversionError instead of guessing a
default.
"""

from __future__ import annotations

import json as _json
import math
import re
from datetime import datetime
from decimal import Decimal
from email.utils import parsedate_to_datetime
from typing import Any, Callable

from ..exceptions import ConversionError

_INTEGER_PATTERN = re.compile(r"-?\d+")


def to_boolean(value: Any) -> bool:
    """Only the literal string "true" is true."""
    return value == "true"


def to_date(value: Any) -> datetime:
    """
    Parse an RFC 2822 (``Mon, 05 Oct 2015 18:44:27 GMT``) or ISO 8601 string.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ConversionError("date", value)

    text = value.strip()
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        pass

    # fromisoformat() only accepts a trailing "Z" from Python 3.11 on
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise ConversionError("date", value, str(e)) from e


def to_number(value: Any) -> int | float | None:
    """
    Convert a numeric string to int or float.

    The empty string means "no value" and yields None. Otherwise the
    canonical form of the number must match the stripped input exactly,
    so "55-55", "5.0" and "007" are rejected.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    if value == "":
        return None
    if not isinstance(value, str):
        raise ConversionError("number", value)

    text = value.strip()
    if _INTEGER_PATTERN.fullmatch(text):
        number: int | float = int(text)
    else:
        try:
            number = float(text)
        except ValueError as e:
            raise ConversionError("number", value) from e
        if not math.isfinite(number):
            raise ConversionError("number", value, "not a finite number")
        if number.is_integer():
            number = int(number)

    canonical = _canonical(number)
    if canonical != text:
        raise ConversionError("number", value, f"canonical form is {canonical}")
    return number


def _canonical(number: int | float) -> str:
    # Plain notation for 1e-6 <= |x| < 1e21, as ECMAScript Number#toString
    text = repr(number)
    if "e" in text and 1e-6 <= abs(number) < 1e21:
        text = format(Decimal(text), "f")
    return text


def to_integer(value: Any) -> int:
    """Strict base-10 integer conversion."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if not isinstance(value, str) or not _INTEGER_PATTERN.fullmatch(value):
        raise ConversionError("integer", value)
    number = int(value)
    if str(number) != value:
        raise ConversionError("integer", value, f"canonical form is {number}")
    return number


def to_json(value: Any) -> Any:
    """Decode JSON strings; anything else is already decoded."""
    if not isinstance(value, str):
        return value
    try:
        return _json.loads(value)
    except _json.JSONDecodeError as e:
        raise ConversionError("json", value, str(e)) from e


CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "boolean": to_boolean,
    "date": to_date,
    "number": to_number,
    "integer": to_integer,
    "json": to_json,
}


def convert(name: str, value: Any) -> Any:
    """Run the converter registered under ``name``."""
    try:
        converter = CONVERTERS[name]
    except KeyError:
        raise ConversionError(name, value, "unknown converter") from None
    return converter(value)
