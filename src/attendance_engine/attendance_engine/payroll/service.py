from __future__ import annotations

from datetime import date

from ..core.exceptions import NotFoundError
from ..reports.service import AggregationService
from ..users.repository import EmployeeRepository
from .estimator import PayrollEstimate, PayrollEstimator


class PayrollService:
    def __init__(
        self,
        employees: EmployeeRepository,
        aggregation: AggregationService,
        estimator: PayrollEstimator,
    ):
        self._employees = employees
        self._aggregation = aggregation
        self._estimator = estimator

    def estimate_for(self, employee_id: int, year: int, month: int, *, today: date) -> PayrollEstimate:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee does not exist")

        summary = self._aggregation.monthly_summary(employee_id, year, month, today=today)
        return self._estimator.estimate(employee_id, year, month, employee.daily_rate, summary)
