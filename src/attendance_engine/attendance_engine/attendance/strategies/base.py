from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ...policy.model import WorkHoursPolicy
from ...users.model import Employee
from ..model import AttendanceRecord


@dataclass(frozen=True)
class PunchDecision:
    is_late: bool = False
    late_minutes: int = 0
    early_leave_minutes: int = 0
    work_hours: float = 0.0
    overtime_hours: float = 0.0
    daily_salary_earned: Decimal = field(default_factory=lambda: Decimal("0"))
    note: Optional[str] = None


class PunchStrategy(ABC):
    """Strategy Pattern: encapsulate how a punch is classified before it is stored."""

    @abstractmethod
    def decide(
        self,
        *,
        employee: Employee,
        now: datetime,
        policy: WorkHoursPolicy,
        day_records: Sequence[AttendanceRecord],
    ) -> PunchDecision:
        raise NotImplementedError
