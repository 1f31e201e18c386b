from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.enums import Outcome, RecordType
from ..core.exceptions import WriteConflict
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_decimal
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    record_id, employee_id, work_date, record_type, outcome, recorded_at,
    is_late, late_minutes, early_leave_minutes, work_hours, overtime_hours,
    latitude, longitude, daily_salary_earned, policy_version, note
"""

_INSERT = """
    INSERT INTO attendance_records(
        employee_id, work_date, record_type, outcome, recorded_at,
        is_late, late_minutes, early_leave_minutes, work_hours, overtime_hours,
        latitude, longitude, daily_salary_earned, policy_version, note
    )
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
"""


def _params(record: AttendanceRecord) -> tuple:
    return (
        record.employee_id,
        record.work_date,
        record.record_type.value,
        record.outcome.value,
        record.timestamp,
        int(record.is_late),
        int(record.late_minutes),
        int(record.early_leave_minutes),
        record.work_hours,
        record.overtime_hours,
        record.latitude,
        record.longitude,
        record.daily_salary_earned,
        record.policy_version,
        record.note,
    )


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        record_type=RecordType(r["record_type"]),
        outcome=Outcome(r["outcome"]),
        timestamp=r["recorded_at"],
        is_late=bool(r.get("is_late")),
        late_minutes=int(r.get("late_minutes") or 0),
        early_leave_minutes=int(r.get("early_leave_minutes") or 0),
        work_hours=float(r.get("work_hours") or 0),
        overtime_hours=float(r.get("overtime_hours") or 0),
        latitude=float(r["latitude"]) if r.get("latitude") is not None else None,
        longitude=float(r["longitude"]) if r.get("longitude") is not None else None,
        daily_salary_earned=to_decimal(r.get("daily_salary_earned")),
        policy_version=r.get("policy_version"),
        note=r.get("note"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_attendance(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY work_date, recorded_at
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def insert_punch(self, record: AttendanceRecord) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(_INSERT, _params(record))
                return int(cur.lastrowid)
        except IntegrityError as exc:
            if exc.errno == errorcode.ER_DUP_ENTRY:
                raise WriteConflict(
                    f"{record.record_type.value} conflicts with an existing record for employee {record.employee_id} on {record.work_date}"
                ) from exc
            raise

    def insert_absence_if_missing(self, record: AttendanceRecord) -> bool:
        # The presence slot rejects an absence when the day already has one or a successful check-in.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(_INSERT, _params(record))
                return cur.rowcount == 1
        except IntegrityError as exc:
            if exc.errno == errorcode.ER_DUP_ENTRY:
                return False
            raise
