from __future__ import annotations

import logging
from datetime import date

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds
from ..core.exceptions import StatsUnavailable
from .aggregation import CalendarDay, DailyStats, MonthlySummary, daily_stats, monthly_calendar, monthly_summary

logger = logging.getLogger(__name__)


class AggregationService:
    """Fetches records and hands them to the pure aggregation functions.

    Any fetch failure becomes ``StatsUnavailable`` so dashboards degrade instead of crashing.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def _fetch(self, *, start: date, end: date, employee_id: int | None = None):
        try:
            return list(self._attendance.fetch_attendance(start_date=start, end_date=end, employee_id=employee_id))
        except Exception as exc:
            logger.warning("Attendance fetch for %s..%s failed: %s", start, end, exc)
            raise StatsUnavailable("stats unavailable") from exc

    def daily_stats(self, day: date) -> DailyStats:
        return daily_stats(self._fetch(start=day, end=day), day)

    def monthly_calendar(self, employee_id: int, year: int, month: int, *, today: date) -> list[CalendarDay]:
        start, end = month_bounds(year, month)
        records = self._fetch(start=start, end=end, employee_id=employee_id)
        return monthly_calendar(records, employee_id, year, month, today)

    def monthly_summary(self, employee_id: int, year: int, month: int, *, today: date) -> MonthlySummary:
        start, end = month_bounds(year, month)
        records = self._fetch(start=start, end=end, employee_id=employee_id)
        return monthly_summary(records, employee_id, year, month, today)
