"""Tests for date format compilation and strict round trips."""

from datetime import datetime

import pytest

from formcheck.core.errors import ErrorCode
from formcheck.validation.dates import (
    DEFAULT_FORMAT,
    Notation,
    compile_format,
    format_date,
    matches_format,
    notation_of,
    parse_date,
)


class TestNotation:
    @pytest.mark.parametrize("fmt,notation", [
        ("%Y-%m-%d", Notation.STRFTIME),
        ("YYYY-MM-DD", Notation.TOKENS),
        ("DD.MM.YYYY", Notation.TOKENS),
        ("Y-m-d", Notation.CLASSIC),
        ("d.m.Y H:i", Notation.CLASSIC),
    ])
    def test_detection(self, fmt, notation):
        assert notation_of(fmt) is notation

    def test_default_is_iso_date(self):
        assert DEFAULT_FORMAT == "Y-m-d"
        assert compile_format(DEFAULT_FORMAT).pattern == "%Y-%m-%d"


class TestCompile:
    def test_classic_pattern(self):
        assert compile_format("d.m.Y H:i:s").pattern == "%d.%m.%Y %H:%M:%S"

    def test_token_pattern_keeps_literals(self):
        assert compile_format("YYYY-MM-DDTHH:mm:ss").pattern == "%Y-%m-%dT%H:%M:%S"

    def test_backslash_escapes_letter(self):
        fmt = compile_format(r"Y\m")
        assert fmt.pattern == "%Ym"
        assert matches_format("2024m", r"Y\m")

    def test_compiled_formats_are_cached(self):
        assert compile_format("Y/m/d") is compile_format("Y/m/d")


class TestParseAndFormat:
    def test_parse_ok(self):
        result = parse_date("2024-02-29", "Y-m-d")
        assert result.is_ok()
        assert result.unwrap() == datetime(2024, 2, 29)

    def test_parse_err_carries_date_code(self):
        result = parse_date("2024-02-30", "Y-m-d")
        assert result.is_err()
        error = result.unwrap_err()
        assert error.code is ErrorCode.E2012_INVALID_DATE
        assert error.metadata["format"] == "Y-m-d"
        assert isinstance(error.cause, ValueError)

    def test_parse_non_string(self):
        assert parse_date(None).is_err()

    def test_format_unpadded_twelve_hour(self):
        moment = datetime(2024, 3, 5, 14, 7)
        assert format_date(moment, "j.n.Y g:i a") == "5.3.2024 2:07 pm"
        assert format_date(moment, "d.m.y h:i A") == "05.03.24 02:07 PM"

    def test_format_default(self):
        assert format_date(datetime(1980, 6, 15)) == "1980-06-15"

    def test_round_trip_with_time(self):
        assert matches_format("15.06.1980 08:30", "d.m.Y H:i")
        assert not matches_format("15.06.1980 8:30", "d.m.Y H:i")
        assert matches_format("15.06.1980 8:30", "d.m.Y G:i")

    def test_bad_strftime_directive_fails_quietly(self):
        assert not matches_format("2024", "%Q")
