"""Tests for SCPI number parsing and formatting."""

from __future__ import annotations

import enum
import math

import pytest

from dslib.errors import ParseError
from dslib.number import (
    format_argument,
    format_bool,
    format_number,
    parse_bool,
    parse_int,
    parse_number,
)


class Source(enum.Enum):
    CHAN1 = "CHAN1"
    MATH = "MATH"


# ---------------------------------------------------------------------------
# parse_number
# ---------------------------------------------------------------------------


class TestParseNumber:
    """Tests for parse_number."""

    def test_nr1_integer(self) -> None:
        assert parse_number("42") == 42.0

    def test_nr2_fixed_point(self) -> None:
        assert parse_number("-0.5") == -0.5

    def test_nr3_scientific(self) -> None:
        assert parse_number("1.000000e-03") == 0.001

    def test_nan(self) -> None:
        assert math.isnan(parse_number("NAN"))

    def test_inf(self) -> None:
        assert parse_number("INF") == float("inf")

    def test_ninf(self) -> None:
        assert parse_number("NINF") == float("-inf")

    def test_negative_inf(self) -> None:
        assert parse_number("-INF") == float("-inf")

    def test_whitespace_stripped(self) -> None:
        assert parse_number("  3.14  ") == 3.14

    def test_invalid_raises_parse_error(self) -> None:
        with pytest.raises(ParseError, match="Invalid SCPI number"):
            parse_number("abc")

    def test_empty_raises_parse_error(self) -> None:
        with pytest.raises(ParseError, match="Invalid SCPI number"):
            parse_number("")

    def test_parse_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_number("abc")


# ---------------------------------------------------------------------------
# parse_int
# ---------------------------------------------------------------------------


class TestParseInt:
    """Tests for parse_int."""

    def test_positive(self) -> None:
        assert parse_int("42") == 42

    def test_negative(self) -> None:
        assert parse_int("-113") == -113

    def test_whitespace_stripped(self) -> None:
        assert parse_int("  1\n") == 1

    def test_float_raises(self) -> None:
        with pytest.raises(ParseError, match="Invalid SCPI integer"):
            parse_int("1.5")

    def test_text_raises(self) -> None:
        with pytest.raises(ParseError, match="Invalid SCPI integer"):
            parse_int("abc")


# ---------------------------------------------------------------------------
# parse_bool
# ---------------------------------------------------------------------------


class TestParseBool:
    """Tests for parse_bool."""

    @pytest.mark.parametrize("token", ["1", "ON", "on", " 1 "])
    def test_true_tokens(self, token: str) -> None:
        assert parse_bool(token) is True

    @pytest.mark.parametrize("token", ["0", "OFF", "Off"])
    def test_false_tokens(self, token: str) -> None:
        assert parse_bool(token) is False

    def test_invalid_raises(self) -> None:
        with pytest.raises(ParseError, match="Invalid SCPI boolean"):
            parse_bool("yes")


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


class TestFormatNumber:
    """Tests for format_number."""

    def test_finite_value(self) -> None:
        assert format_number(3.14) == "3.14"

    def test_nan(self) -> None:
        assert format_number(float("nan")) == "NAN"

    def test_inf(self) -> None:
        assert format_number(float("inf")) == "INF"

    def test_negative_inf(self) -> None:
        assert format_number(float("-inf")) == "NINF"


class TestFormatBool:
    """Tests for format_bool."""

    def test_true(self) -> None:
        assert format_bool(True) == "1"

    def test_false(self) -> None:
        assert format_bool(False) == "0"


class TestFormatArgument:
    """Tests for format_argument."""

    def test_bool(self) -> None:
        assert format_argument(True) == "1"

    def test_int(self) -> None:
        assert format_argument(7) == "7"

    def test_float(self) -> None:
        assert format_argument(-2.5) == "-2.5"

    def test_enum_uses_value(self) -> None:
        assert format_argument(Source.MATH) == "MATH"

    def test_string_verbatim(self) -> None:
        assert format_argument("BMP24") == "BMP24"
