from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import Outcome, RecordType
from ..core.exceptions import ValidationError
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from .strategies.base import PunchStrategy
from .strategies.check_in_strategy import CheckInStrategy
from .strategies.check_out_strategy import CheckOutStrategy
from .strategies.failed_attempt_strategy import FailedAttemptStrategy


@dataclass
class PunchStrategyFactory:
    """Factory Pattern: choose the strategy for a punch type and outcome."""

    calculator: PayrollCalculator = field(default_factory=StandardPayrollCalculator)

    def for_punch(self, *, record_type: RecordType, outcome: Outcome) -> PunchStrategy:
        if record_type == RecordType.ABSENT or outcome == Outcome.ABSENT:
            raise ValidationError("absences are recorded by reconciliation only")
        if outcome != Outcome.SUCCESS:
            return FailedAttemptStrategy(outcome)
        if record_type == RecordType.CHECK_IN:
            return CheckInStrategy(self.calculator)
        return CheckOutStrategy()
