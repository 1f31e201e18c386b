from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..reports.aggregation import MonthlySummary
from .calculator.base import PayrollCalculator, money
from .calculator.standard_calculator import StandardPayrollCalculator


@dataclass(frozen=True)
class PayrollEstimate:
    employee_id: int
    year: int
    month: int
    working_days: int
    expected_monthly: Decimal
    earned_to_date: Decimal
    today_earned: Decimal

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "month": f"{self.year:04d}-{self.month:02d}",
            "working_days": self.working_days,
            "expected_monthly": str(self.expected_monthly),
            "earned_to_date": str(self.earned_to_date),
            "today_earned": str(self.today_earned),
        }


class PayrollEstimator:
    """Read-side salary projection from attendance outcomes.

    expected = rate x working days; earned = rate / working days x present days.
    """

    def __init__(self, calculator: Optional[PayrollCalculator] = None):
        self._calculator = calculator or StandardPayrollCalculator()

    def estimate(
        self,
        employee_id: int,
        year: int,
        month: int,
        daily_rate: Decimal,
        summary: MonthlySummary,
    ) -> PayrollEstimate:
        rate = Decimal(daily_rate)
        working_days = self._calculator.working_days(year, month)
        earned = rate / working_days * summary.present_days if working_days else Decimal("0")
        return PayrollEstimate(
            employee_id=employee_id,
            year=year,
            month=month,
            working_days=working_days,
            expected_monthly=money(rate * working_days),
            earned_to_date=money(earned),
            today_earned=money(summary.today_earned),
        )
