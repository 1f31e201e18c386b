from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from src.attendance_engine.attendance_engine.attendance.service import AttendanceService
from src.attendance_engine.attendance_engine.core.enums import DayStatus, EmploymentStatus, Outcome, RecordType
from src.attendance_engine.attendance_engine.core.exceptions import NotFoundError, ValidationError
from src.attendance_engine.attendance_engine.policy.model import WorkHoursPolicy
from src.attendance_engine.attendance_engine.policy.service import PolicyService


@pytest.fixture
def ledger(ledger_factory):
    return ledger_factory()


@pytest.fixture
def service(ledger, employee_factory, employees_factory, policies_factory, policy):
    roster = employees_factory(
        [
            employee_factory(1, daily_rate="500000"),
            employee_factory(2, status=EmploymentStatus.INACTIVE),
        ]
    )
    return AttendanceService(ledger, roster, PolicyService(policies_factory(policy)))


def test_on_time_check_in_earns_full_rate(service, ledger):
    record = service.record_punch(1, RecordType.CHECK_IN, Outcome.SUCCESS, now=datetime(2024, 3, 1, 8, 14))

    assert record.record_id == 1
    assert record.is_late is False
    assert record.daily_salary_earned == Decimal("500000.00")
    assert record.note == "On time."
    assert len(ledger.records) == 1


def test_late_check_in_deducts_salary(service):
    record = service.record_punch(1, RecordType.CHECK_IN, Outcome.SUCCESS, now=datetime(2024, 3, 1, 8, 45))

    assert record.is_late is True
    assert record.late_minutes == 30
    assert record.daily_salary_earned == Decimal("462500.00")


def test_check_out_computes_hours(service):
    service.record_punch(1, RecordType.CHECK_IN, Outcome.SUCCESS, now=datetime(2024, 3, 1, 8, 0))
    record = service.record_punch(1, RecordType.CHECK_OUT, Outcome.SUCCESS, now=datetime(2024, 3, 1, 18, 0))

    assert record.work_hours == 9.0
    assert record.overtime_hours == 1.0
    assert record.early_leave_minutes == 0
    assert service.get_day_report(1, date(2024, 3, 1)).status == DayStatus.PRESENT_COMPLETE


def test_duplicate_check_in_rejected(service):
    service.record_punch(1, RecordType.CHECK_IN, Outcome.SUCCESS, now=datetime(2024, 3, 1, 8, 0))

    with pytest.raises(ValidationError):
        service.record_punch(1, RecordType.CHECK_IN, Outcome.SUCCESS, now=datetime(2024, 3, 1, 8, 5))


def test_check_out_requires_check_in(service):
    with pytest.raises(ValidationError):
        service.record_punch(1, RecordType.CHECK_OUT, Outcome.SUCCESS, now=datetime(2024, 3, 1, 17, 0))


def test_second_check_out_rejected(service):
    service.record_punch(1, RecordType.CHECK_IN, Outcome.SUCCESS, now=datetime(2024, 3, 1, 8, 0))
    service.record_punch(1, RecordType.CHECK_OUT, Outcome.SUCCESS, now=datetime(2024, 3, 1, 17, 0))

    with pytest.raises(ValidationError):
        service.record_punch(1, RecordType.CHECK_OUT, Outcome.SUCCESS, now=datetime(2024, 3, 1, 17, 5))


def test_failed_attempts_are_stored_without_classification(service, ledger):
    first = service.record_punch(1, RecordType.CHECK_IN, Outcome.FACE_INVALID, now=datetime(2024, 3, 1, 9, 0))
    second = service.record_punch(1, RecordType.CHECK_IN, Outcome.FACE_INVALID, now=datetime(2024, 3, 1, 9, 1))

    assert first.is_late is False
    assert first.daily_salary_earned == Decimal("0")
    assert first.note == "Attempt rejected: face_invalid"
    assert second.record_id == 2
    assert service.get_day_report(1, date(2024, 3, 1)).status == DayStatus.NO_TRACE


def test_unknown_and_inactive_employees(service):
    with pytest.raises(NotFoundError):
        service.record_punch(99, RecordType.CHECK_IN, Outcome.SUCCESS, now=datetime(2024, 3, 1, 8, 0))
    with pytest.raises(ValidationError):
        service.record_punch(2, RecordType.CHECK_IN, Outcome.SUCCESS, now=datetime(2024, 3, 1, 8, 0))


def test_record_keeps_policy_version(ledger, employee_factory, employees_factory, policies_factory, policy):
    policies = PolicyService(policies_factory())
    saved = policies.replace(policy.to_setting())
    service = AttendanceService(ledger, employees_factory([employee_factory(1)]), policies)

    record = service.record_punch(1, RecordType.CHECK_IN, Outcome.SUCCESS, now=datetime(2024, 3, 1, 8, 0))

    assert record.policy_version == saved.version == "2024-03-01T09:00:00"


def test_punch_without_timestamp_uses_injected_clock(ledger, employee_factory, employees_factory, policies_factory, policy):
    service = AttendanceService(
        ledger,
        employees_factory([employee_factory(1)]),
        PolicyService(policies_factory(policy)),
        clock=lambda: datetime(2024, 3, 4, 8, 3),
    )

    record = service.record_punch(1, RecordType.CHECK_IN, Outcome.SUCCESS)

    assert record.work_date == date(2024, 3, 4)
    assert record.timestamp == datetime(2024, 3, 4, 8, 3)


def test_day_report_reevaluates_under_current_policy(ledger, employee_factory, employees_factory, policies_factory, policy):
    policies = policies_factory(policy)
    service = AttendanceService(ledger, employees_factory([employee_factory(1)]), PolicyService(policies))
    stored = service.record_punch(1, RecordType.CHECK_IN, Outcome.SUCCESS, now=datetime(2024, 3, 1, 8, 35))
    service.record_punch(1, RecordType.CHECK_IN, Outcome.FACE_INVALID, now=datetime(2024, 3, 1, 16, 0))
    service.record_punch(1, RecordType.CHECK_OUT, Outcome.SUCCESS, now=datetime(2024, 3, 1, 17, 0))
    assert stored.late_minutes == 20

    policies.set_policy(WorkHoursPolicy(start_time=time(8, 30), end_time=time(17, 0)))
    report = service.get_day_report(1, date(2024, 3, 1))

    assert report.status == DayStatus.PRESENT_COMPLETE
    assert report.classification.is_late is False
    assert report.classification.late_minutes == 0
    assert report.classification.work_hours == 7.42
    assert report.policy_version == "2024-03-01T09:00:00"
    assert len(report.records) == 3
    assert ledger.records[0].late_minutes == 20


def test_day_report_for_unknown_employee(service):
    with pytest.raises(NotFoundError):
        service.get_day_report(99, date(2024, 3, 1))
