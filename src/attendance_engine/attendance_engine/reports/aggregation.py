"""Read-only views over already-fetched attendance records.

Every function here is pure: it neither reads the clock nor the ledger, and
results are recomputed from scratch on every call.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import is_weekend, iter_days, iter_month_days, month_bounds
from ..core.enums import CalendarStatus


@dataclass(frozen=True)
class DailyStats:
    day: date
    present_count: int
    late_count: int
    absent_count: int
    late_employee_ids: tuple[int, ...] = ()
    absent_employee_ids: tuple[int, ...] = ()

    def to_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "present": self.present_count,
            "late": self.late_count,
            "absent": self.absent_count,
            "late_employee_ids": list(self.late_employee_ids),
            "absent_employee_ids": list(self.absent_employee_ids),
        }


@dataclass(frozen=True)
class CalendarDay:
    day: date
    status: CalendarStatus

    def to_dict(self) -> dict:
        return {"date": self.day.isoformat(), "status": self.status.value}


@dataclass(frozen=True)
class MonthlySummary:
    employee_id: int
    year: int
    month: int
    present_days: int
    on_time_days: int
    late_days: int
    absent_days: int
    today_earned: Decimal = field(default_factory=lambda: Decimal("0"))

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "month": f"{self.year:04d}-{self.month:02d}",
            "present_days": self.present_days,
            "on_time_days": self.on_time_days,
            "late_days": self.late_days,
            "absent_days": self.absent_days,
            "today_earned": str(self.today_earned),
        }


def daily_stats(records: Iterable[AttendanceRecord], day: date) -> DailyStats:
    """Counts of distinct employees: checked in, checked in late, marked absent."""
    present: set[int] = set()
    late: set[int] = set()
    absent: set[int] = set()
    for r in records:
        if r.work_date != day:
            continue
        if r.is_successful_check_in:
            present.add(r.employee_id)
            if r.is_late:
                late.add(r.employee_id)
        elif r.is_absent:
            absent.add(r.employee_id)

    return DailyStats(
        day=day,
        present_count=len(present),
        late_count=len(late),
        absent_count=len(absent),
        late_employee_ids=tuple(sorted(late)),
        absent_employee_ids=tuple(sorted(absent)),
    )


def _by_date(records: Iterable[AttendanceRecord], employee_id: int) -> dict[date, list[AttendanceRecord]]:
    grouped: dict[date, list[AttendanceRecord]] = defaultdict(list)
    for r in records:
        if r.employee_id == employee_id:
            grouped[r.work_date].append(r)
    return grouped


def calendar_status(day: date, records: Sequence[AttendanceRecord], today: date) -> CalendarStatus:
    # Weekend always wins over ledger state.
    if is_weekend(day):
        return CalendarStatus.WEEKEND

    has_in = any(r.is_successful_check_in for r in records)
    has_out = any(r.is_successful_check_out for r in records)
    if has_in and has_out:
        return CalendarStatus.COMPLETE
    if has_in:
        return CalendarStatus.PARTIAL_IN
    if has_out:
        return CalendarStatus.PARTIAL_OUT
    if any(r.is_absent for r in records) or day < today:
        return CalendarStatus.ABSENT
    if day == today:
        return CalendarStatus.NO_DATA
    return CalendarStatus.FUTURE


def monthly_calendar(
    records: Iterable[AttendanceRecord],
    employee_id: int,
    year: int,
    month: int,
    today: date,
) -> list[CalendarDay]:
    grouped = _by_date(records, employee_id)
    return [CalendarDay(day=d, status=calendar_status(d, grouped.get(d, []), today)) for d in iter_month_days(year, month)]


def monthly_summary(
    records: Iterable[AttendanceRecord],
    employee_id: int,
    year: int,
    month: int,
    today: date,
) -> MonthlySummary:
    """Month-to-date attendance of one employee.

    ``absent_days`` is the number of weekdays elapsed (up to ``today``) minus the
    days with a successful check-in, never below zero.
    """
    start, end = month_bounds(year, month)
    check_ins: dict[date, AttendanceRecord] = {}
    today_earned = Decimal("0")
    for r in records:
        if r.employee_id != employee_id or not r.is_successful_check_in:
            continue
        if not start <= r.work_date <= end:
            continue
        check_ins.setdefault(r.work_date, r)
        if r.work_date == today:
            today_earned += r.daily_salary_earned

    late_days = sum(1 for r in check_ins.values() if r.is_late)
    elapsed_end = min(end, today)
    elapsed_weekdays = sum(1 for d in iter_days(start, elapsed_end) if not is_weekend(d)) if elapsed_end >= start else 0

    return MonthlySummary(
        employee_id=employee_id,
        year=year,
        month=month,
        present_days=len(check_ins),
        on_time_days=len(check_ins) - late_days,
        late_days=late_days,
        absent_days=max(elapsed_weekdays - len(check_ins), 0),
        today_earned=today_earned,
    )
