from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import DayStatus, Outcome, RecordType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one ledger row (a punch attempt or an absence)."""

    employee_id: int
    work_date: date
    record_type: RecordType
    outcome: Outcome
    timestamp: datetime
    is_late: bool = False
    late_minutes: int = 0
    early_leave_minutes: int = 0
    work_hours: float = 0.0
    overtime_hours: float = 0.0
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    daily_salary_earned: Decimal = field(default_factory=lambda: Decimal("0"))
    policy_version: Optional[str] = None
    note: Optional[str] = None
    record_id: Optional[int] = None

    @property
    def is_success(self) -> bool:
        return self.outcome == Outcome.SUCCESS

    @property
    def is_successful_check_in(self) -> bool:
        return self.record_type == RecordType.CHECK_IN and self.is_success

    @property
    def is_successful_check_out(self) -> bool:
        return self.record_type == RecordType.CHECK_OUT and self.is_success

    @property
    def is_absent(self) -> bool:
        return self.record_type == RecordType.ABSENT


@dataclass(frozen=True)
class DayClassification:
    """Lateness/earliness metrics of one employee-day."""

    is_late: bool = False
    late_minutes: int = 0
    is_early_leave: bool = False
    early_leave_minutes: int = 0
    work_hours: float = 0.0
    overtime_hours: float = 0.0


@dataclass(frozen=True)
class DayReport:
    """One employee-day re-evaluated against the current policy."""

    employee_id: int
    work_date: date
    status: DayStatus
    classification: DayClassification
    records: tuple[AttendanceRecord, ...] = ()
    policy_version: Optional[str] = None

    def to_dict(self) -> dict:
        c = self.classification
        return {
            "employee_id": self.employee_id,
            "date": self.work_date.isoformat(),
            "status": self.status.value,
            "is_late": c.is_late,
            "late_minutes": c.late_minutes,
            "is_early_leave": c.is_early_leave,
            "early_leave_minutes": c.early_leave_minutes,
            "work_hours": c.work_hours,
            "overtime_hours": c.overtime_hours,
            "policy_version": self.policy_version,
        }
