from __future__ import annotations

import logging

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import domain_error_response, fail, ok
from ..core.enums import Outcome, RecordType
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def _record_to_dict(record) -> dict:
    return {
        "record_id": record.record_id,
        "employee_id": record.employee_id,
        "work_date": record.work_date.isoformat(),
        "record_type": record.record_type.value,
        "outcome": record.outcome.value,
        "timestamp": record.timestamp.isoformat(timespec="seconds"),
        "is_late": record.is_late,
        "late_minutes": record.late_minutes,
        "early_leave_minutes": record.early_leave_minutes,
        "work_hours": record.work_hours,
        "overtime_hours": record.overtime_hours,
        "daily_salary_earned": str(record.daily_salary_earned),
        "note": record.note,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/punch", methods=["POST"], endpoint="api_punch")
    def api_punch():
        data = request.get_json(silent=True) or {}
        try:
            employee_id = int(data.get("employee_id"))
            record_type = RecordType(str(data.get("record_type", "")).strip())
            outcome = Outcome(str(data.get("outcome", Outcome.SUCCESS.value)).strip())
            latitude = float(data["latitude"]) if data.get("latitude") is not None else None
            longitude = float(data["longitude"]) if data.get("longitude") is not None else None
        except (TypeError, ValueError):
            return fail("Invalid punch payload", 400)

        try:
            record = container.attendance_service.record_punch(
                employee_id,
                record_type,
                outcome,
                now=container.clock(),
                latitude=latitude,
                longitude=longitude,
            )
        except DomainError as e:
            return domain_error_response(e)
        return ok({"record": _record_to_dict(record)}, message=record.note or "Recorded", status=201)

    @app.route("/api/attendance/reconcile", methods=["POST"], endpoint="api_reconcile")
    def api_reconcile():
        data = request.get_json(silent=True) or {}
        raw = str(data.get("date") or "").strip()
        try:
            target_date = parse_iso_date(raw) if raw else container.clock().date()
        except ValueError:
            return fail("Invalid date, expected YYYY-MM-DD", 400)

        try:
            inserted = container.sweep.reconcile_now(target_date, now=container.clock())
        except DomainError as e:
            logger.warning("Manual reconciliation of %s failed: %s", target_date, e)
            return domain_error_response(e)
        return ok(
            {"date": target_date.isoformat(), "inserted": len(inserted), "employee_ids": [r.employee_id for r in inserted]},
            message=f"{len(inserted)} absence(s) recorded",
        )

    @app.route("/api/employees/<int:employee_id>/days/<day>", methods=["GET"], endpoint="api_employee_day")
    def api_employee_day(employee_id: int, day: str):
        try:
            work_date = parse_iso_date(day)
        except ValueError:
            return fail("Invalid date, expected YYYY-MM-DD", 400)

        try:
            report = container.attendance_service.get_day_report(employee_id, work_date)
        except DomainError as e:
            return domain_error_response(e)
        payload = report.to_dict()
        payload["records"] = [_record_to_dict(r) for r in report.records]
        return ok({"day": payload})

    @app.route("/api/policy", methods=["GET"], endpoint="api_policy_get")
    def api_policy_get():
        try:
            policy = container.policy_service.current()
        except DomainError as e:
            return domain_error_response(e)
        return ok({"policy": policy.to_setting(), "version": policy.version})

    @app.route("/api/policy", methods=["PUT"], endpoint="api_policy_put")
    def api_policy_put():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return fail("Policy payload must be a JSON object", 400)
        try:
            policy = container.policy_service.replace(data)
        except DomainError as e:
            return domain_error_response(e)
        return ok({"policy": policy.to_setting(), "version": policy.version}, message="Policy updated")
