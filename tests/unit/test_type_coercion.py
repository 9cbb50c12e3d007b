"""
Unit tests for cell value coercion.
"""

import math
from datetime import date, datetime, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from factory_ops.core.validators import (
    CoercionError,
    format_instant,
    parse_number,
    to_delivered,
    to_float,
    to_int,
    to_iso_instant,
)


class TestNumberCoercion:
    """Tests for parse_number / to_float / to_int"""

    def test_parse_number_accepts_text_and_numbers(self):
        assert parse_number("180") == 180.0
        assert parse_number(" 7.5 ") == 7.5
        assert parse_number(42) == 42.0

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", "nan", "inf", True, float("nan")])
    def test_parse_number_rejects(self, value):
        with pytest.raises(CoercionError):
            parse_number(value)

    def test_to_float_defaults_to_zero(self):
        assert to_float("abc") == 0.0
        assert to_float(None) == 0.0
        assert to_float("") == 0.0

    def test_to_int_truncates_decimals(self):
        assert to_int("15") == 15
        assert to_int("15.7") == 15
        assert to_int(18.0) == 18
        assert to_int("many") == 0

    @given(st.text())
    def test_to_float_is_total(self, text):
        """Whatever the text, the result is a finite number"""
        assert math.isfinite(to_float(text))

    @given(st.floats(allow_nan=False, allow_infinity=False))
    def test_to_float_round_trips_finite_floats(self, value):
        assert to_float(repr(value)) == value


class TestDelivered:
    """Tests for the delivered flag"""

    @pytest.mark.parametrize("value", [True, "true"])
    def test_true_values(self, value):
        assert to_delivered(value) is True

    @pytest.mark.parametrize("value", [False, "false", "TRUE", "True", "yes", "1", 1, None, ""])
    def test_everything_else_is_false(self, value):
        assert to_delivered(value) is False


class TestDateCoercion:
    """Tests for ISO instant normalization"""

    def test_calendar_date_string(self):
        assert to_iso_instant("2025-10-01") == "2025-10-01T00:00:00.000Z"

    def test_zulu_timestamp(self):
        assert to_iso_instant("2025-10-01T08:00:00Z") == "2025-10-01T08:00:00.000Z"

    def test_offset_converted_to_utc(self):
        assert to_iso_instant("2025-10-01T10:30:00+02:00") == "2025-10-01T08:30:00.000Z"

    @pytest.mark.parametrize("text", ["2025/10/01", "20251001", "10/01/2025"])
    def test_alternate_formats(self, text):
        assert to_iso_instant(text) == "2025-10-01T00:00:00.000Z"

    def test_native_values(self):
        assert to_iso_instant(date(2025, 10, 1)) == "2025-10-01T00:00:00.000Z"
        assert to_iso_instant(datetime(2025, 10, 1, 12, 0)) == "2025-10-01T12:00:00.000Z"

    @pytest.mark.parametrize("value", ["", "yesterday", "2025-13-45", None, 12.5])
    def test_unparseable_raises(self, value):
        with pytest.raises(CoercionError):
            to_iso_instant(value)

    def test_format_instant_milliseconds(self):
        moment = datetime(2025, 10, 1, 8, 0, 0, 123456, tzinfo=timezone.utc)
        assert format_instant(moment) == "2025-10-01T08:00:00.123Z"

    def test_early_years_are_zero_padded(self):
        assert to_iso_instant("0001-01-01") == "0001-01-01T00:00:00.000Z"
        assert to_iso_instant("0999-06-15T12:00:00Z") == "0999-06-15T12:00:00.000Z"

    @pytest.mark.parametrize("text", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:00:00-05:00"])
    def test_utc_overflow_raises_coercion_error(self, text):
        with pytest.raises(CoercionError, match="out of range"):
            to_iso_instant(text)
