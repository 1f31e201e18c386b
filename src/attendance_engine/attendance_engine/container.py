from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Callable, Iterable, Optional

from .attendance.factory import PunchStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local, to_local_naive
from .core.constants import ABSENCE_GRACE_MINUTES, DEFAULT_SWEEP_LOOKBACK_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .payroll.calculator.base import PayrollCalculator
from .payroll.calculator.calendar_calculator import CalendarPayrollCalculator
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.estimator import PayrollEstimator
from .payroll.service import PayrollService
from .policy.mysql_policy_repository import MySQLPolicyRepository
from .policy.service import PolicyService
from .reconciliation.reconciler import AbsenceReconciler
from .reconciliation.scheduler import ReconciliationSweep
from .reports.service import AggregationService
from .users.mysql_employee_repository import MySQLEmployeeRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    attendance_repo: MySQLAttendanceRepository
    policy_repo: MySQLPolicyRepository

    policy_service: PolicyService
    attendance_service: AttendanceService
    aggregation_service: AggregationService
    payroll_service: PayrollService
    reconciler: AbsenceReconciler
    sweep: ReconciliationSweep

    clock: Callable[[], datetime]


def build_calculator(mode: str = "fixed", holidays: Iterable[date] = ()) -> PayrollCalculator:
    if (mode or "fixed").strip().lower() == "calendar":
        return CalendarPayrollCalculator(holidays)
    return StandardPayrollCalculator()


def build_container(
    *,
    db_config: dict,
    tz: Optional[tzinfo] = None,
    grace_minutes: int = ABSENCE_GRACE_MINUTES,
    lookback_days: int = DEFAULT_SWEEP_LOOKBACK_DAYS,
    skip_weekends: bool = False,
    working_days_mode: str = "fixed",
    holidays: Iterable[date] = (),
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        connection_timeout=int(db_config.get("connection_timeout", 10)),
    )
    conn = DatabaseConnection.get_instance(config)

    if tz is None:
        clock = now_local
    else:
        def clock() -> datetime:
            return to_local_naive(datetime.now(tz), tz)

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    policy_repo = MySQLPolicyRepository(conn, clock=clock)

    calculator = build_calculator(working_days_mode, holidays)
    policy_service = PolicyService(policy_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        policy_service,
        strategy_factory=PunchStrategyFactory(calculator),
        clock=clock,
    )
    aggregation_service = AggregationService(attendance_repo)
    payroll_service = PayrollService(employees_repo, aggregation_service, PayrollEstimator(calculator))
    reconciler = AbsenceReconciler(attendance_repo, employees_repo, grace_minutes=grace_minutes, tz=tz)
    sweep = ReconciliationSweep(
        reconciler,
        policy_service,
        lookback_days=lookback_days,
        skip_weekends=skip_weekends,
        clock=clock,
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        policy_repo=policy_repo,
        policy_service=policy_service,
        attendance_service=attendance_service,
        aggregation_service=aggregation_service,
        payroll_service=payroll_service,
        reconciler=reconciler,
        sweep=sweep,
        clock=clock,
    )
