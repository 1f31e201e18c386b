from datetime import datetime, time

from src.attendance_engine.attendance_engine.attendance.classifier import classify, classify_day, day_status
from src.attendance_engine.attendance_engine.core.enums import DayStatus, Outcome, RecordType
from src.attendance_engine.attendance_engine.policy.model import WorkHoursPolicy


def test_check_in_inside_threshold_is_on_time(policy):
    result = classify(datetime(2024, 3, 1, 8, 14), None, policy)

    assert result.is_late is False
    assert result.late_minutes == 0


def test_check_in_after_threshold_is_late(policy):
    result = classify(datetime(2024, 3, 1, 8, 16), None, policy)

    assert result.is_late is True
    assert result.late_minutes == 1


def test_threshold_boundary_and_partial_minutes(policy):
    assert classify(datetime(2024, 3, 1, 8, 15, 0), None, policy).is_late is False

    partial = classify(datetime(2024, 3, 1, 8, 15, 30), None, policy)
    assert partial.is_late is True
    assert partial.late_minutes == 1


def test_early_leave_before_threshold(policy):
    result = classify(None, datetime(2024, 3, 1, 16, 40), policy)

    assert result.is_early_leave is True
    assert result.early_leave_minutes == 5
    assert result.work_hours == 0.0


def test_check_out_inside_threshold_is_not_early(policy):
    result = classify(None, datetime(2024, 3, 1, 16, 45), policy)

    assert result.is_early_leave is False
    assert result.early_leave_minutes == 0


def test_work_and_overtime_hours_exclude_break(policy):
    result = classify(datetime(2024, 3, 1, 8, 0), datetime(2024, 3, 1, 18, 30), policy)

    assert result.work_hours == 9.5
    assert result.overtime_hours == 1.5


def test_short_day_has_no_overtime(policy):
    result = classify(datetime(2024, 3, 1, 9, 0), datetime(2024, 3, 1, 12, 0), policy)

    assert result.work_hours == 2.0
    assert result.overtime_hours == 0.0


def test_thresholds_follow_policy():
    strict = WorkHoursPolicy(start_time=time(9, 0), end_time=time(18, 0), late_threshold_minutes=0)

    result = classify(datetime(2024, 3, 1, 9, 1), None, strict)

    assert result.is_late is True
    assert result.late_minutes == 1


def test_classify_day_uses_successful_punches_only(policy, punch_factory):
    records = [
        punch_factory(1, datetime(2024, 3, 1, 7, 50), outcome=Outcome.FACE_INVALID),
        punch_factory(1, datetime(2024, 3, 1, 8, 20)),
        punch_factory(1, datetime(2024, 3, 1, 17, 5), record_type=RecordType.CHECK_OUT),
    ]

    result = classify_day(records, policy)

    assert result.is_late is True
    assert result.late_minutes == 5
    assert result.work_hours == 7.75


def test_day_status(punch_factory):
    check_in = punch_factory(1, datetime(2024, 3, 1, 8, 0))
    check_out = punch_factory(1, datetime(2024, 3, 1, 17, 0), record_type=RecordType.CHECK_OUT)
    failed = punch_factory(1, datetime(2024, 3, 1, 8, 0), outcome=Outcome.LOCATION_INVALID)
    absent = punch_factory(1, datetime(2024, 3, 1, 17, 30), record_type=RecordType.ABSENT, outcome=Outcome.ABSENT)

    assert day_status([check_in, check_out]) == DayStatus.PRESENT_COMPLETE
    assert day_status([check_in]) == DayStatus.PRESENT_PARTIAL
    assert day_status([absent]) == DayStatus.ABSENT
    assert day_status([failed]) == DayStatus.NO_TRACE
    assert day_status([]) == DayStatus.NO_TRACE
