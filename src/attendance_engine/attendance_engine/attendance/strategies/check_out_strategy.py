from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ...policy.model import WorkHoursPolicy
from ...users.model import Employee
from ..classifier import classify, successful_punches
from ..model import AttendanceRecord
from .base import PunchDecision, PunchStrategy


class CheckOutStrategy(PunchStrategy):
    """Successful check-out: worked hours, overtime and early leave."""

    def decide(
        self,
        *,
        employee: Employee,
        now: datetime,
        policy: WorkHoursPolicy,
        day_records: Sequence[AttendanceRecord],
    ) -> PunchDecision:
        check_in, _ = successful_punches(day_records)
        result = classify(check_in.timestamp if check_in else None, now, policy)
        note = f"Left {result.early_leave_minutes} minutes early." if result.is_early_leave else "Normal check-out."
        return PunchDecision(
            early_leave_minutes=result.early_leave_minutes,
            work_hours=result.work_hours,
            overtime_hours=result.overtime_hours,
            note=note,
        )
