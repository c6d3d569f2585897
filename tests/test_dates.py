"""Tests for calendar-day helpers."""

from datetime import date, datetime, timedelta, timezone

from smokefree.recovery.dates import (
    add_days_to_iso,
    days_before,
    days_since,
    format_iso_date,
    local_day,
    parse_iso_date,
    shift_years,
    today_iso,
    whole_years_between,
)


class TestParse:
    def test_valid(self):
        assert parse_iso_date("2026-02-10") == date(2026, 2, 10)

    def test_impossible_date(self):
        assert parse_iso_date("2026-02-30") is None

    def test_wrong_format(self):
        assert parse_iso_date("2026-2-10") is None
        assert parse_iso_date("20260210") is None
        assert parse_iso_date("") is None

    def test_leap_day(self):
        assert parse_iso_date("2024-02-29") == date(2024, 2, 29)
        assert parse_iso_date("2025-02-29") is None

    def test_format_pads(self):
        assert format_iso_date(date(987, 3, 4)) == "0987-03-04"


class TestDaysSince:
    def test_local_calendar_boundaries(self):
        now = datetime(2026, 2, 26, 23, 50, 0)
        assert days_since("2026-02-26", now) == 0
        assert days_since("2026-02-25", now) == 1
        assert days_since("2026-02-27", now) == 0

    def test_aware_datetime_uses_its_own_day(self):
        tz = timezone(timedelta(hours=-5))
        now = datetime(2026, 2, 26, 23, 50, tzinfo=tz)
        assert local_day(now) == date(2026, 2, 26)
        assert days_since("2026-02-20", now) == 6

    def test_invalid_is_zero(self):
        assert days_since("nope", date(2026, 2, 26)) == 0

    def test_today_iso(self):
        assert today_iso(datetime(2026, 2, 26, 8, 0)) == "2026-02-26"


class TestArithmetic:
    def test_add_days(self):
        assert add_days_to_iso("2026-02-26", 3) == "2026-03-01"
        assert add_days_to_iso("2026-02-26", -26) == "2026-01-31"

    def test_add_days_invalid(self):
        assert add_days_to_iso("bad", 1) is None

    def test_shift_years_leap_day(self):
        assert shift_years(date(2024, 2, 29), -1) == date(2023, 2, 28)

    def test_whole_years(self):
        assert whole_years_between(date(1991, 1, 10), date(2026, 1, 9)) == 34
        assert whole_years_between(date(1991, 1, 10), date(2026, 1, 10)) == 35

    def test_add_days_past_calendar_end(self):
        assert add_days_to_iso("9999-12-30", 5) is None
        assert add_days_to_iso("0001-01-05", -10) is None

    def test_days_before_stops_at_calendar_floor(self):
        assert days_before(date(2026, 2, 26), 26) == date(2026, 1, 31)
        assert days_before(date(1, 6, 1), 5000) == date.min
