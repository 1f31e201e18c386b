from __future__ import annotations

from ...core.constants import WORKING_DAYS_PER_MONTH
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: a fixed number of working days per month (22)."""

    def __init__(self, working_days_per_month: int = WORKING_DAYS_PER_MONTH):
        self._days = int(working_days_per_month)

    def working_days(self, year: int, month: int) -> int:
        return self._days
