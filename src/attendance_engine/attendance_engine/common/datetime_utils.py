from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Iterator, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_year_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM string into (year, month)."""
    parsed = datetime.strptime(value, "%Y-%m")
    return parsed.year, parsed.month


def parse_hhmm(value: str) -> time:
    """Parse 'HH:MM' (or 'HH:MM:SS') into a time."""
    parts = value.strip().split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid time string: {value!r}")
    seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
    return time(hour=int(parts[0]), minute=int(parts[1]), second=seconds)


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_local_naive(moment: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Convert an aware datetime to naive wall-clock time in ``tz``.

    Ledger timestamps are stored as naive local times; naive input is returned as is.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz).replace(tzinfo=None)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Inclusive day range."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def iter_month_days(year: int, month: int) -> Iterator[date]:
    start, end = month_bounds(year, month)
    return iter_days(start, end)
