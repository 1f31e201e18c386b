from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Append-mostly attendance ledger."""

    def fetch_attendance(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        """All records (every type and outcome) with work_date in [start_date, end_date]."""

        raise NotImplementedError

    def insert_punch(self, record: AttendanceRecord) -> int:
        """Insert a check_in/check_out row; returns record_id.

        Raises WriteConflict when the (employee, date, slot) key is taken.
        """

        raise NotImplementedError

    def insert_absence_if_missing(self, record: AttendanceRecord) -> bool:
        """Conditional insert keyed on (employee_id, work_date, presence slot).

        Must be atomic; returns False when an absence or a successful check-in
        already holds the slot.
        """

        raise NotImplementedError
