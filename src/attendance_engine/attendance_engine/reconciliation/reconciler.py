"""Absence backfill.

For one calendar day, every active non-admin employee without any attendance
trace gets exactly one ``absent`` record, once the day is closed (policy end
time plus a grace window). Each insert is an independent conditional write, so
concurrent or interrupted passes converge on the same ledger state.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_hhmm, to_local_naive
from ..core.constants import ABSENCE_GRACE_MINUTES
from ..core.enums import Outcome, RecordType
from ..core.exceptions import InvariantViolation, LedgerFetchFailed, RosterFetchFailed, WriteConflict
from ..policy.model import WorkHoursPolicy
from ..users.repository import EmployeeRepository

logger = logging.getLogger(__name__)


def find_invariant_violations(records: Iterable[AttendanceRecord]) -> list[InvariantViolation]:
    """Employee-days holding both an absent row and a successful check-in."""
    records = list(records)
    checked_in = {(r.employee_id, r.work_date) for r in records if r.is_successful_check_in}
    absent = {(r.employee_id, r.work_date) for r in records if r.is_absent}
    return [InvariantViolation(employee_id, work_date) for employee_id, work_date in sorted(checked_in & absent)]


class AbsenceReconciler:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        grace_minutes: int = ABSENCE_GRACE_MINUTES,
        tz: Optional[tzinfo] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._grace_minutes = int(grace_minutes)
        self._tz = tz

    def local_now(self, now: datetime) -> datetime:
        return to_local_naive(now, self._tz)

    def cutoff(self, target_date: date, policy: WorkHoursPolicy) -> datetime:
        return policy.absence_cutoff(target_date, grace_minutes=self._grace_minutes)

    def is_eligible(self, target_date: date, policy: WorkHoursPolicy, now: datetime) -> bool:
        """A day is closed when it is fully past, or it is today and the cutoff has passed."""
        local_now = self.local_now(now)
        today = local_now.date()
        if target_date < today:
            return True
        return target_date == today and local_now >= self.cutoff(target_date, policy)

    def reconcile(self, target_date: date, policy: WorkHoursPolicy, now: datetime) -> list[AttendanceRecord]:
        """Insert the missing absences for ``target_date``; returns the rows actually inserted."""
        if not self.is_eligible(target_date, policy, now):
            logger.debug("Skipping %s: day still open at %s", target_date, now)
            return []

        try:
            roster = list(self._employees.fetch_roster())
        except Exception as exc:
            raise RosterFetchFailed(f"could not load roster for {target_date}") from exc

        try:
            records = list(self._attendance.fetch_attendance(start_date=target_date, end_date=target_date))
        except Exception as exc:
            raise LedgerFetchFailed(f"could not load attendance for {target_date}") from exc

        for violation in find_invariant_violations(records):
            logger.error("Invariant violation, manual review required: %s", violation)

        already_absent = {r.employee_id for r in records if r.is_absent}
        # Any row counts, failed face/location attempts included.
        traced = {r.employee_id for r in records}

        cutoff = self.cutoff(target_date, policy)
        inserted: list[AttendanceRecord] = []
        for employee in roster:
            if not employee.is_reconcilable:
                continue
            if employee.employee_id in already_absent or employee.employee_id in traced:
                continue

            record = self._absence_record(employee.employee_id, target_date, cutoff, policy)
            if self._insert(record):
                inserted.append(record)

        logger.info("Reconciled %s: %d absence(s) inserted", target_date, len(inserted))
        return inserted

    def _insert(self, record: AttendanceRecord) -> bool:
        try:
            created = self._attendance.insert_absence_if_missing(record)
        except WriteConflict:
            created = False
        if not created:
            logger.debug("Absence for employee %s on %s already recorded", record.employee_id, record.work_date)
        return created

    @staticmethod
    def _absence_record(
        employee_id: int,
        target_date: date,
        cutoff: datetime,
        policy: WorkHoursPolicy,
    ) -> AttendanceRecord:
        return AttendanceRecord(
            employee_id=employee_id,
            work_date=target_date,
            record_type=RecordType.ABSENT,
            outcome=Outcome.ABSENT,
            timestamp=cutoff,
            is_late=False,
            late_minutes=0,
            work_hours=0.0,
            overtime_hours=0.0,
            policy_version=policy.version,
            note=f"Absent - no check-in recorded by {format_hhmm(cutoff.time())}",
        )
