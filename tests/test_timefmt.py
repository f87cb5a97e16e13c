"""Tests for the fixed timestamp format and interval arithmetic."""

from datetime import datetime, timedelta, timezone

import pytest
from amsilence.core.errors import TimeParseError, ValidationError
from amsilence.silences.timefmt import (
    add_duration,
    format_timestamp,
    interval_duration,
    parse_timestamp,
)

BASE = "2019-10-27T20:34:28.132Z"


class TestAddDuration:
    def test_hours(self):
        assert add_duration(BASE, "h", 12) == "2019-10-28T08:34:28.132Z"

    def test_week_is_168_hours(self):
        shifted = parse_timestamp(add_duration(BASE, "w", 1))
        assert shifted - parse_timestamp(BASE) == timedelta(hours=168)

    def test_day(self):
        assert add_duration(BASE, "d", 3) == "2019-10-30T20:34:28.132Z"

    @pytest.mark.parametrize("interval", ["", "h", "d", "w", "x", "month"])
    @pytest.mark.parametrize("timestamp", [BASE, "0999-01-01T00:00:00.000Z", "0001-01-01T00:00:00.000Z"])
    def test_zero_count_is_identity(self, timestamp, interval):
        assert add_duration(timestamp, interval, 0) == timestamp

    def test_early_years_stay_zero_padded(self):
        assert add_duration("0999-12-31T23:00:00.000Z", "h", 2) == "1000-01-01T01:00:00.000Z"
        assert add_duration("0099-01-01T00:00:00.000Z", "d", 1) == "0099-01-02T00:00:00.000Z"

    def test_empty_interval_never_shifts(self):
        assert add_duration(BASE, "", 10) == BASE

    def test_crosses_year_boundary(self):
        assert add_duration("2019-12-31T23:00:00.000Z", "h", 2) == "2020-01-01T01:00:00.000Z"

    def test_no_dst_adjustment(self):
        # Europe and the US change clocks around this date; UTC arithmetic must not.
        assert add_duration("2019-03-30T12:00:00.000Z", "d", 2) == "2019-04-01T12:00:00.000Z"

    def test_reversible(self):
        assert add_duration(add_duration(BASE, "d", 5), "d", -5) == BASE

    def test_invalid_timestamp_raises(self):
        with pytest.raises(TimeParseError):
            add_duration("27/10/2019 20:34", "h", 1)

    def test_out_of_range_raises(self):
        with pytest.raises(TimeParseError):
            add_duration("9999-12-31T00:00:00.000Z", "w", 1)


class TestParseTimestamp:
    def test_returns_aware_utc(self):
        parsed = parse_timestamp(BASE)
        assert parsed == datetime(2019, 10, 27, 20, 34, 28, 132000, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "2019-10-27T20:34:28Z",
            "2019-10-27T20:34:28.13Z",
            "2019-10-27T20:34:28.1320Z",
            "2019-10-27T20:34:28.132+02:00",
            "2019-10-27 20:34:28.132Z",
            "2019-02-30T20:34:28.132Z",
            "2019-10-27T20:34:28.132Z\n",
        ],
    )
    def test_rejects_other_formats(self, value):
        with pytest.raises(TimeParseError):
            parse_timestamp(value)

    def test_error_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            parse_timestamp("not-a-time")
        with pytest.raises(ValueError):
            parse_timestamp("not-a-time")


class TestFormatTimestamp:
    def test_truncates_to_milliseconds(self):
        value = datetime(2019, 10, 27, 20, 34, 28, 132999, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2019-10-27T20:34:28.132Z"

    def test_converts_to_utc(self):
        value = datetime(2019, 10, 27, 22, 34, 28, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(value) == "2019-10-27T20:34:28.000Z"


def test_interval_duration_table():
    assert interval_duration("h") == timedelta(hours=1)
    assert interval_duration("d") == timedelta(hours=24)
    assert interval_duration("w") == timedelta(hours=168)
    assert interval_duration("") == timedelta(0)


def test_format_pads_years_below_1000():
    value = datetime(999, 1, 1, 0, 0, 0, 5000, tzinfo=timezone.utc)
    formatted = format_timestamp(value)

    assert formatted == "0999-01-01T00:00:00.005Z"
    assert parse_timestamp(formatted) == value
