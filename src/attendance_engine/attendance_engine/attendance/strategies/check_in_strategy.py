from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from ...payroll.calculator.base import PayrollCalculator
from ...policy.model import WorkHoursPolicy
from ...users.model import Employee
from ..classifier import classify, minutes_after_start
from ..model import AttendanceRecord
from .base import PunchDecision, PunchStrategy


@dataclass
class CheckInStrategy(PunchStrategy):
    """Successful check-in: lateness plus the day's earned amount.

    Lateness is reported past the late threshold, while the pay deduction counts
    from the start time.
    """

    calculator: PayrollCalculator

    def decide(
        self,
        *,
        employee: Employee,
        now: datetime,
        policy: WorkHoursPolicy,
        day_records: Sequence[AttendanceRecord],
    ) -> PunchDecision:
        result = classify(now, None, policy)
        earned = self.calculator.earned_for_check_in(employee.daily_rate, minutes_after_start(now, policy))
        note = f"Late {result.late_minutes} minutes." if result.is_late else "On time."
        return PunchDecision(
            is_late=result.is_late,
            late_minutes=result.late_minutes,
            daily_salary_earned=earned,
            note=note,
        )
