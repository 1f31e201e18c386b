from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

import pytest
from flask import Flask

from src.attendance_engine.attendance_engine.attendance.controller import register as register_attendance
from src.attendance_engine.attendance_engine.attendance.service import AttendanceService
from src.attendance_engine.attendance_engine.core.enums import EmploymentStatus
from src.attendance_engine.attendance_engine.payroll.estimator import PayrollEstimator
from src.attendance_engine.attendance_engine.payroll.service import PayrollService
from src.attendance_engine.attendance_engine.policy.service import PolicyService
from src.attendance_engine.attendance_engine.reconciliation.reconciler import AbsenceReconciler
from src.attendance_engine.attendance_engine.reconciliation.scheduler import ReconciliationSweep
from src.attendance_engine.attendance_engine.reports.controller import register as register_reports
from src.attendance_engine.attendance_engine.reports.service import AggregationService


@pytest.fixture
def ledger(ledger_factory):
    return ledger_factory()


@pytest.fixture
def policies(policies_factory, policy):
    return policies_factory(policy)


@pytest.fixture
def client(ledger, policies, employee_factory, employees_factory, fixed_now):
    employees = employees_factory(
        [
            employee_factory(1, daily_rate="440000"),
            employee_factory(2),
            employee_factory(3, status=EmploymentStatus.INACTIVE),
        ]
    )
    policy_service = PolicyService(policies)
    aggregation = AggregationService(ledger)
    clock = SimpleNamespace(now=fixed_now.replace(hour=8, minute=10))
    container = SimpleNamespace(
        policy_service=policy_service,
        attendance_service=AttendanceService(ledger, employees, policy_service),
        aggregation_service=aggregation,
        payroll_service=PayrollService(employees, aggregation, PayrollEstimator()),
        sweep=ReconciliationSweep(AbsenceReconciler(ledger, employees), policy_service),
        clock=lambda: clock.now,
    )

    app = Flask(__name__)
    app.config["TESTING"] = True
    register_attendance(app, container)
    register_reports(app, container)

    test_client = app.test_client()
    test_client.clock = clock
    return test_client


def test_punch_then_reconcile_then_stats(client, fixed_now):
    resp = client.post("/api/attendance/punch", json={"employee_id": 1, "record_type": "check_in"})
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["success"] is True
    assert body["record"]["is_late"] is False
    assert body["message"] == "On time."

    client.clock.now = fixed_now
    resp = client.post("/api/attendance/reconcile", json={"date": "2024-03-01"})
    assert resp.status_code == 200
    assert resp.get_json()["employee_ids"] == [2]

    resp = client.get("/api/attendance/stats?date=2024-03-01")
    stats = resp.get_json()["stats"]
    assert (stats["present"], stats["late"], stats["absent"]) == (1, 0, 1)


def test_punch_rejections(client):
    resp = client.post("/api/attendance/punch", json={"employee_id": "x", "record_type": "check_in"})
    assert resp.status_code == 400

    resp = client.post("/api/attendance/punch", json={"employee_id": 1, "record_type": "absent", "outcome": "absent"})
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False

    resp = client.post("/api/attendance/punch", json={"employee_id": 99, "record_type": "check_in"})
    assert resp.status_code == 404

    resp = client.post("/api/attendance/punch", json={"employee_id": 1, "record_type": "check_out"})
    assert resp.status_code == 400


def test_failed_attempt_is_recorded(client, ledger):
    resp = client.post(
        "/api/attendance/punch",
        json={"employee_id": 2, "record_type": "check_in", "outcome": "location_invalid", "latitude": 10.77, "longitude": 106.7},
    )

    assert resp.status_code == 201
    assert ledger.records[0].latitude == 10.77


def test_reconcile_rejects_bad_date(client):
    resp = client.post("/api/attendance/reconcile", json={"date": "01/03/2024"})

    assert resp.status_code == 400


def test_stats_unavailable_when_ledger_down(client, ledger, monkeypatch):
    def boom(**kwargs):
        raise ConnectionError("down")

    monkeypatch.setattr(ledger, "fetch_attendance", boom)
    resp = client.get("/api/attendance/stats?date=2024-03-01")

    assert resp.status_code == 503
    assert resp.get_json() == {"success": False, "message": "Stats unavailable"}


def test_calendar_summary_and_payroll(client):
    client.post("/api/attendance/punch", json={"employee_id": 1, "record_type": "check_in"})

    resp = client.get("/api/employees/1/calendar?month=2024-03")
    days = resp.get_json()["days"]
    assert len(days) == 31
    assert days[0] == {"date": "2024-03-01", "status": "PARTIAL_IN"}
    assert days[1]["status"] == "WEEKEND"

    summary = client.get("/api/employees/1/summary").get_json()["summary"]
    assert summary["month"] == "2024-03"
    assert summary["present_days"] == 1
    assert summary["today_earned"] == "440000.00"

    payroll = client.get("/api/employees/1/payroll?month=2024-03").get_json()["payroll"]
    assert payroll["expected_monthly"] == "9680000.00"
    assert payroll["earned_to_date"] == "20000.00"

    assert client.get("/api/employees/1/summary?month=2024-13").status_code == 400
    assert client.get("/api/employees/42/payroll?month=2024-03").status_code == 404


def test_policy_get_and_put(client, policies):
    resp = client.get("/api/policy")
    assert resp.get_json()["policy"]["startTime"] == "08:00"

    resp = client.put("/api/policy", json={"startTime": "09:00", "endTime": "18:00"})
    assert resp.status_code == 200
    assert resp.get_json()["version"] == "2024-03-01T09:00:00"
    assert policies.policy.start_time.hour == 9

    assert client.put("/api/policy", json={"startTime": "19:00", "endTime": "18:00"}).status_code == 400
    assert client.put("/api/policy", json=["not", "an", "object"]).status_code == 400


def test_policy_unavailable(client, policies):
    policies.fail = True

    assert client.get("/api/policy").status_code == 503


def test_check_in_racing_an_absence_returns_conflict(client, ledger, fixed_now, monkeypatch):
    client.clock.now = fixed_now
    client.post("/api/attendance/reconcile", json={"date": "2024-03-01"})

    # Stale read: the punch path does not see the absence that was just written.
    monkeypatch.setattr(ledger, "fetch_attendance", lambda **kwargs: [])
    resp = client.post("/api/attendance/punch", json={"employee_id": 1, "record_type": "check_in"})

    assert resp.status_code == 409
    assert resp.get_json()["success"] is False
    assert [r.employee_id for r in ledger.absences()] == [1, 2]


def test_employee_day_report(client):
    client.post("/api/attendance/punch", json={"employee_id": 1, "record_type": "check_in"})

    resp = client.get("/api/employees/1/days/2024-03-01")
    assert resp.status_code == 200
    day = resp.get_json()["day"]
    assert day["status"] == "PRESENT_PARTIAL"
    assert day["is_late"] is False
    assert [r["record_type"] for r in day["records"]] == ["check_in"]

    assert client.get("/api/employees/1/days/2024-13-01").status_code == 400
    assert client.get("/api/employees/99/days/2024-03-01").status_code == 404
