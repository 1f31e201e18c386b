from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import (
    LATE_DEDUCTION_FREE_MINUTES,
    LATE_DEDUCTION_MAX_RATE,
    LATE_DEDUCTION_RATE_PER_HOUR,
)

CENT = Decimal("0.01")


def money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def working_days(self, year: int, month: int) -> int:
        raise NotImplementedError

    def earned_for_check_in(self, daily_rate: Decimal, minutes_after_start: int) -> Decimal:
        """Amount earned by a successful check-in.

        Rule: full daily rate; when the check-in is more than 15 minutes after
        the start time, 10% per hour since the start is deducted, capped at 50%.
        """
        rate = Decimal(daily_rate)
        if minutes_after_start > LATE_DEDUCTION_FREE_MINUTES:
            deduction = min(
                Decimal(minutes_after_start) / Decimal(60) * Decimal(LATE_DEDUCTION_RATE_PER_HOUR),
                Decimal(LATE_DEDUCTION_MAX_RATE),
            )
            rate = rate * (Decimal(1) - deduction)
        return money(rate)
