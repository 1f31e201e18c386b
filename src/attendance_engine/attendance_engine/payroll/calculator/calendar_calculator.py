from __future__ import annotations

from datetime import date
from typing import Iterable

from ...common.datetime_utils import is_weekend, iter_month_days
from .base import PayrollCalculator


class CalendarPayrollCalculator(PayrollCalculator):
    """Working days taken from the calendar: Monday-Friday minus holidays."""

    def __init__(self, holidays: Iterable[date] = ()):
        self._holidays = frozenset(holidays)

    def working_days(self, year: int, month: int) -> int:
        return sum(
            1 for day in iter_month_days(year, month) if not is_weekend(day) and day not in self._holidays
        )
