"""Unit tests for the primitive converters."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from modelparser.engine.converters import (
    CONVERTERS,
    convert,
    to_boolean,
    to_date,
    to_integer,
    to_json,
    to_number,
)
from modelparser.exceptions import ConversionError


class TestBoolean:
    def test_true(self) -> None:
        assert to_boolean("true") is True

    def test_false(self) -> None:
        assert to_boolean("false") is False

    def test_default(self) -> None:
        assert to_boolean(None) is False

    @pytest.mark.parametrize("value", ["True", "1", 1, True, ""])
    def test_only_literal_true_string(self, value) -> None:
        assert to_boolean(value) is False


class TestDate:
    def test_rfc_2822(self) -> None:
        result = to_date("Mon, 05 Oct 2015 18:44:27 GMT")
        assert result == datetime(2015, 10, 5, 18, 44, 27, tzinfo=timezone.utc)

    def test_iso_8601(self) -> None:
        assert to_date("2015-10-05T18:44:27") == datetime(2015, 10, 5, 18, 44, 27)

    def test_iso_8601_zulu(self) -> None:
        result = to_date("2015-10-05T18:44:27Z")
        assert result.tzinfo is not None
        assert result.utcoffset().total_seconds() == 0

    def test_empty_string_raises(self) -> None:
        with pytest.raises(ConversionError):
            to_date("")

    def test_garbage_raises(self) -> None:
        with pytest.raises(ConversionError):
            to_date("not a date")

    def test_non_string_raises(self) -> None:
        with pytest.raises(ConversionError):
            to_date(5)


class TestNumber:
    def test_empty_string_is_none(self) -> None:
        assert to_number("") is None

    def test_integer(self) -> None:
        result = to_number("5")
        assert result == 5
        assert isinstance(result, int)

    def test_float(self) -> None:
        assert to_number("3.6") == 3.6

    def test_negative(self) -> None:
        assert to_number("-12") == -12

    def test_surrounding_whitespace(self) -> None:
        assert to_number(" 42 ") == 42

    @pytest.mark.parametrize("value", ["55-55", "5.0", "007", "12abc", "nan", "inf", "1e3", "abc"])
    def test_non_canonical_raises(self, value: str) -> None:
        with pytest.raises(ConversionError):
            to_number(value)

    @pytest.mark.parametrize(
        "value, expected",
        [("0.00001", 0.00001), ("0.000001", 0.000001), ("-0.000015", -0.000015)],
    )
    def test_small_decimals_in_plain_notation(self, value: str, expected: float) -> None:
        assert to_number(value) == expected

    @pytest.mark.parametrize("value", ["1e-05", "0.0000001", "0.000010"])
    def test_small_decimals_must_be_canonical(self, value: str) -> None:
        with pytest.raises(ConversionError):
            to_number(value)

    def test_numbers_pass_through(self) -> None:
        assert to_number(7) == 7
        assert to_number(2.5) == 2.5

    def test_bool_raises(self) -> None:
        with pytest.raises(ConversionError):
            to_number(True)

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="55-55"):
            to_number("55-55")


class TestInteger:
    def test_integer(self) -> None:
        assert to_integer("10") == 10

    @pytest.mark.parametrize("value", ["3.6", "", "010", "x"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ConversionError):
            to_integer(value)


class TestJson:
    def test_decodes_strings(self) -> None:
        assert to_json('{"a": 1}') == {"a": 1}

    def test_passes_decoded_data(self) -> None:
        data = {"a": 1}
        assert to_json(data) is data

    def test_invalid_json(self) -> None:
        with pytest.raises(ConversionError):
            to_json("{nope")


class TestConvert:
    def test_dispatches_by_name(self) -> None:
        assert convert("number", "5") == 5
        assert convert("boolean", "true") is True

    def test_unknown_converter(self) -> None:
        with pytest.raises(ConversionError, match="unknown converter"):
            convert("uuid", "x")

    def test_registry(self) -> None:
        assert set(CONVERTERS) == {"boolean", "date", "number", "integer", "json"}
