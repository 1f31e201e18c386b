from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from ...core.enums import Outcome
from ...policy.model import WorkHoursPolicy
from ...users.model import Employee
from ..model import AttendanceRecord
from .base import PunchDecision, PunchStrategy


@dataclass
class FailedAttemptStrategy(PunchStrategy):
    """Rejected punch (face/location invalid): stored as a trace, never classified."""

    outcome: Outcome

    def decide(
        self,
        *,
        employee: Employee,
        now: datetime,
        policy: WorkHoursPolicy,
        day_records: Sequence[AttendanceRecord],
    ) -> PunchDecision:
        return PunchDecision(note=f"Attempt rejected: {self.outcome.value}")
