"""Day classification rules.

Pure functions of (punches, policy): no I/O and no clock access, so a day can be
re-evaluated at any time, e.g. after the policy changed.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable, Optional

from ..core.enums import DayStatus
from ..policy.model import WorkHoursPolicy
from .model import AttendanceRecord, DayClassification


def _minutes_past(moment: datetime, cutoff: datetime) -> int:
    # Partial minutes count as a whole minute so that a late punch never reports 0.
    seconds = (moment - cutoff).total_seconds()
    return int(math.ceil(seconds / 60)) if seconds > 0 else 0


def minutes_after_start(check_in: datetime, policy: WorkHoursPolicy) -> int:
    """Whole minutes from the policy start time to ``check_in`` (0 when not after it)."""
    return _minutes_past(check_in, datetime.combine(check_in.date(), policy.start_time))


def classify(
    check_in: Optional[datetime],
    check_out: Optional[datetime],
    policy: WorkHoursPolicy,
) -> DayClassification:
    is_late = False
    late_minutes = 0
    if check_in is not None:
        cutoff = policy.late_cutoff(check_in.date())
        is_late = check_in > cutoff
        late_minutes = _minutes_past(check_in, cutoff)

    is_early_leave = False
    early_leave_minutes = 0
    if check_out is not None:
        cutoff = policy.early_leave_cutoff(check_out.date())
        is_early_leave = check_out < cutoff
        early_leave_minutes = _minutes_past(cutoff, check_out)

    work_hours = 0.0
    overtime_hours = 0.0
    if check_in is not None and check_out is not None:
        total_minutes = int((check_out - check_in) // timedelta(minutes=1))
        work_minutes = max(0, total_minutes - policy.break_duration_minutes)
        work_hours = round(work_minutes / 60, 2)
        overtime_hours = round(max(0, work_minutes - policy.standard_work_minutes) / 60, 2)

    return DayClassification(
        is_late=is_late,
        late_minutes=late_minutes,
        is_early_leave=is_early_leave,
        early_leave_minutes=early_leave_minutes,
        work_hours=work_hours,
        overtime_hours=overtime_hours,
    )


def successful_punches(records: Iterable[AttendanceRecord]) -> tuple[Optional[AttendanceRecord], Optional[AttendanceRecord]]:
    """Earliest successful check-in and latest successful check-out."""
    check_in = None
    check_out = None
    for r in records:
        if r.is_successful_check_in and (check_in is None or r.timestamp < check_in.timestamp):
            check_in = r
        elif r.is_successful_check_out and (check_out is None or r.timestamp > check_out.timestamp):
            check_out = r
    return check_in, check_out


def classify_day(records: Iterable[AttendanceRecord], policy: WorkHoursPolicy) -> DayClassification:
    """Re-evaluate one employee-day from its ledger rows."""
    check_in, check_out = successful_punches(records)
    return classify(
        check_in.timestamp if check_in else None,
        check_out.timestamp if check_out else None,
        policy,
    )


def day_status(records: Iterable[AttendanceRecord]) -> DayStatus:
    """Derive DayStatus from one employee-day's records.

    Presence is decided by successful punches only; failed attempts alone leave
    the day at NO_TRACE (they still block absence marking, see the reconciler).
    """
    records = list(records)
    has_in = any(r.is_successful_check_in for r in records)
    has_out = any(r.is_successful_check_out for r in records)
    if has_in and has_out:
        return DayStatus.PRESENT_COMPLETE
    if has_in or has_out:
        return DayStatus.PRESENT_PARTIAL
    if any(r.is_absent for r in records):
        return DayStatus.ABSENT
    return DayStatus.NO_TRACE
