from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Read-only view of the external employee directory.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def fetch_roster(self) -> Sequence[Employee]:
        """All employees with their role and status; callers filter eligibility."""

        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError
