from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import Outcome, RecordType
from ..core.exceptions import NotFoundError, ValidationError
from ..policy.service import PolicyService
from ..users.repository import EmployeeRepository
from .classifier import classify_day, day_status
from .factory import PunchStrategyFactory
from .model import AttendanceRecord, DayReport
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Punch ingestion: stores already-validated check_in/check_out events.

    Never writes absences; those belong to the reconciler.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        policies: PolicyService,
        *,
        strategy_factory: PunchStrategyFactory | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._employees = employees
        self._policies = policies
        self._factory = strategy_factory or PunchStrategyFactory()
        self._clock = clock

    def record_punch(
        self,
        employee_id: int,
        record_type: RecordType,
        outcome: Outcome,
        *,
        now: datetime | None = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> AttendanceRecord:
        now = now or self._clock()
        today = now.date()

        strategy = self._factory.for_punch(record_type=record_type, outcome=outcome)

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee does not exist")
        if not employee.is_active:
            raise ValidationError("Employee is not active")

        day_records = self.get_day_records(employee_id, today)
        if outcome == Outcome.SUCCESS:
            self._check_punch_allowed(record_type, day_records)

        policy = self._policies.current()
        decision = strategy.decide(employee=employee, now=now, policy=policy, day_records=day_records)

        record = AttendanceRecord(
            employee_id=employee_id,
            work_date=today,
            record_type=record_type,
            outcome=outcome,
            timestamp=now,
            is_late=decision.is_late,
            late_minutes=decision.late_minutes,
            early_leave_minutes=decision.early_leave_minutes,
            work_hours=decision.work_hours,
            overtime_hours=decision.overtime_hours,
            latitude=latitude,
            longitude=longitude,
            daily_salary_earned=decision.daily_salary_earned,
            policy_version=policy.version,
            note=decision.note,
        )
        record_id = self._attendance.insert_punch(record)
        logger.info(
            "Recorded %s (%s) for employee %s on %s", record_type.value, outcome.value, employee_id, today
        )
        return replace(record, record_id=record_id)

    def _check_punch_allowed(self, record_type: RecordType, day_records: Sequence[AttendanceRecord]) -> None:
        if any(r.is_absent for r in day_records):
            raise ValidationError("This day is already marked absent")

        has_in = any(r.is_successful_check_in for r in day_records)
        if record_type == RecordType.CHECK_IN:
            if has_in:
                raise ValidationError("Already checked in today")
            return

        if not has_in:
            raise ValidationError("No check-in recorded today")
        if any(r.is_successful_check_out for r in day_records):
            raise ValidationError("Already checked out today")

    def get_day_records(self, employee_id: int, work_date: date) -> list[AttendanceRecord]:
        return list(
            self._attendance.fetch_attendance(start_date=work_date, end_date=work_date, employee_id=employee_id)
        )

    def get_day_report(self, employee_id: int, work_date: date) -> DayReport:
        """Status and metrics of one employee-day, recomputed under the current policy."""
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee does not exist")

        records = self.get_day_records(employee_id, work_date)
        policy = self._policies.current()
        return DayReport(
            employee_id=employee_id,
            work_date=work_date,
            status=day_status(records),
            classification=classify_day(records, policy),
            records=tuple(records),
            policy_version=policy.version,
        )
