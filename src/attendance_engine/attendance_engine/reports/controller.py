from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date, parse_year_month
from ..common.responses import domain_error_response, fail, ok
from ..common.validators import require_positive_id
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _today():
        return container.clock().date()

    def _month_arg() -> tuple[int, int]:
        raw = (request.args.get("month") or "").strip()
        if not raw:
            today = _today()
            return today.year, today.month
        return parse_year_month(raw)

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="api_daily_stats")
    def api_daily_stats():
        raw = (request.args.get("date") or "").strip()
        try:
            day = parse_iso_date(raw) if raw else _today()
        except ValueError:
            return fail("Invalid date, expected YYYY-MM-DD", 400)

        try:
            stats = container.aggregation_service.daily_stats(day)
        except DomainError as e:
            return domain_error_response(e)
        return ok({"stats": stats.to_dict()})

    @app.route("/api/employees/<int:employee_id>/calendar", methods=["GET"], endpoint="api_employee_calendar")
    def api_employee_calendar(employee_id: int):
        try:
            year, month = _month_arg()
        except ValueError:
            return fail("Invalid month, expected YYYY-MM", 400)

        try:
            require_positive_id(employee_id, "employee_id")
            days = container.aggregation_service.monthly_calendar(employee_id, year, month, today=_today())
        except DomainError as e:
            return domain_error_response(e)
        return ok({"employee_id": employee_id, "month": f"{year:04d}-{month:02d}", "days": [d.to_dict() for d in days]})

    @app.route("/api/employees/<int:employee_id>/summary", methods=["GET"], endpoint="api_employee_summary")
    def api_employee_summary(employee_id: int):
        try:
            year, month = _month_arg()
        except ValueError:
            return fail("Invalid month, expected YYYY-MM", 400)

        try:
            require_positive_id(employee_id, "employee_id")
            summary = container.aggregation_service.monthly_summary(employee_id, year, month, today=_today())
        except DomainError as e:
            return domain_error_response(e)
        return ok({"summary": summary.to_dict()})

    @app.route("/api/employees/<int:employee_id>/payroll", methods=["GET"], endpoint="api_employee_payroll")
    def api_employee_payroll(employee_id: int):
        try:
            year, month = _month_arg()
        except ValueError:
            return fail("Invalid month, expected YYYY-MM", 400)

        try:
            require_positive_id(employee_id, "employee_id")
            estimate = container.payroll_service.estimate_for(employee_id, year, month, today=_today())
        except DomainError as e:
            return domain_error_response(e)
        return ok({"payroll": estimate.to_dict()})
