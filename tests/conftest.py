from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

import pytest

from src.attendance_engine.attendance_engine.attendance.model import AttendanceRecord
from src.attendance_engine.attendance_engine.core.enums import EmploymentStatus, Outcome, RecordType, Role
from src.attendance_engine.attendance_engine.core.exceptions import WriteConflict
from src.attendance_engine.attendance_engine.policy.model import WorkHoursPolicy
from src.attendance_engine.attendance_engine.users.model import Employee


class InMemoryEmployees:
    def __init__(self, employees: list[Employee]):
        self._employees = {e.employee_id: e for e in employees}
        self.roster_calls = 0

    def fetch_roster(self):
        self.roster_calls += 1
        return list(self._employees.values())

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._employees.get(employee_id)


class InMemoryAttendance:
    """Ledger with the same uniqueness rule as the MySQL table.

    Per (employee, day): one presence row (successful check-in or absence, never
    both) and one successful check-out; rejected attempts are not unique.
    """

    def __init__(self, records: list[AttendanceRecord] | None = None):
        self._lock = threading.Lock()
        self._records: list[AttendanceRecord] = []
        self._id = 0
        for r in records or []:
            self._append(r)

    @property
    def records(self) -> list[AttendanceRecord]:
        with self._lock:
            return list(self._records)

    def absences(self) -> list[AttendanceRecord]:
        return [r for r in self.records if r.is_absent]

    @staticmethod
    def _slot(record: AttendanceRecord):
        if record.is_absent or record.is_successful_check_in:
            return record.employee_id, record.work_date, "presence"
        if record.is_successful_check_out:
            return record.employee_id, record.work_date, "check_out"
        return None

    def _taken(self, record: AttendanceRecord) -> bool:
        slot = self._slot(record)
        return slot is not None and any(self._slot(r) == slot for r in self._records)

    def _append(self, record: AttendanceRecord) -> int:
        self._id += 1
        self._records.append(replace(record, record_id=self._id))
        return self._id

    def fetch_attendance(self, *, start_date: date, end_date: date, employee_id: int | None = None):
        return [
            r
            for r in self.records
            if start_date <= r.work_date <= end_date and (employee_id is None or r.employee_id == employee_id)
        ]

    def insert_punch(self, record: AttendanceRecord) -> int:
        with self._lock:
            if self._taken(record):
                raise WriteConflict("duplicate punch")
            return self._append(record)

    def insert_absence_if_missing(self, record: AttendanceRecord) -> bool:
        with self._lock:
            if self._taken(record):
                return False
            self._append(record)
            return True


class InMemoryPolicies:
    def __init__(self, policy: Optional[WorkHoursPolicy] = None):
        self.policy = policy
        self.fail = False

    def get_policy(self) -> Optional[WorkHoursPolicy]:
        if self.fail:
            raise RuntimeError("settings table unreachable")
        return self.policy

    def set_policy(self, policy: WorkHoursPolicy) -> WorkHoursPolicy:
        self.policy = replace(policy, updated_at=datetime(2024, 3, 1, 9, 0, 0))
        return self.policy


def make_employee(employee_id: int, *, role=Role.STAFF, status=EmploymentStatus.ACTIVE, daily_rate="500000"):
    return Employee(
        employee_id=employee_id,
        full_name=f"Employee {employee_id}",
        role=role,
        status=status,
        daily_rate=Decimal(daily_rate),
    )


def make_punch(employee_id: int, moment: datetime, record_type=RecordType.CHECK_IN, outcome=Outcome.SUCCESS, **kwargs):
    return AttendanceRecord(
        employee_id=employee_id,
        work_date=moment.date(),
        record_type=record_type,
        outcome=outcome,
        timestamp=moment,
        **kwargs,
    )


@pytest.fixture
def fixed_now() -> datetime:
    # 2024-03-01 is a Friday.
    return datetime(2024, 3, 1, 17, 31, 0)


@pytest.fixture
def policy() -> WorkHoursPolicy:
    return WorkHoursPolicy(start_time=time(8, 0), end_time=time(17, 0))


@pytest.fixture
def employee_factory():
    return make_employee


@pytest.fixture
def punch_factory():
    return make_punch


@pytest.fixture
def ledger_factory():
    return InMemoryAttendance


@pytest.fixture
def employees_factory():
    return InMemoryEmployees


@pytest.fixture
def policies_factory():
    return InMemoryPolicies
