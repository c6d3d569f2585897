"""Calendar-day helpers. "now" is always passed in, never read here."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def local_day(now: date | datetime) -> date:
    """Calendar day of `now` in its own timezone (naive values are local)."""
    if isinstance(now, datetime):
        return now.date()
    return now


def parse_iso_date(value: str | None) -> date | None:
    """Parse a strict YYYY-MM-DD string. Returns None for anything else."""
    if not isinstance(value, str):
        return None
    match = _ISO_DATE_RE.match(value)
    if match is None:
        return None
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        return None


def format_iso_date(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def today_iso(now: date | datetime) -> str:
    return format_iso_date(local_day(now))


def add_days_to_iso(iso_date: str, days: int) -> str | None:
    """Shifted date string, or None when the input is unparsable or the result leaves 0001-9999."""
    parsed = parse_iso_date(iso_date)
    if parsed is None:
        return None
    try:
        return format_iso_date(parsed + timedelta(days=days))
    except OverflowError:
        return None


def days_before(day: date, days: int) -> date:
    """`day` minus `days`, stopping at date.min instead of overflowing."""
    return day - timedelta(days=min(days, days_between(date.min, day)))


def days_between(start: date, end: date) -> int:
    return (end - start).days


def days_since(iso_date: str, now: date | datetime) -> int:
    """Whole local calendar days from `iso_date` to `now`.

    Future dates clamp to 0, as do unparsable ones.
    """
    parsed = parse_iso_date(iso_date)
    if parsed is None:
        return 0
    return max(0, days_between(parsed, local_day(now)))


def shift_years(day: date, years: int) -> date:
    """Move `day` by whole calendar years; Feb 29 lands on Feb 28."""
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day.replace(year=day.year + years, day=28)


def whole_years_between(start: date, end: date) -> int:
    """Completed birthdays-style years from start to end (negative if reversed)."""
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return years
