from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.enums import EmploymentStatus, Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee, as seen by the attendance engine.

    Note: a plain data object (no DB access). Directory CRUD lives elsewhere.
    """

    employee_id: int
    full_name: str
    role: Role
    status: EmploymentStatus
    daily_rate: Decimal = Decimal("0")

    @property
    def is_active(self) -> bool:
        return self.status == EmploymentStatus.ACTIVE

    @property
    def is_reconcilable(self) -> bool:
        """Only active, non-admin employees are expected to punch in."""
        return self.is_active and self.role != Role.ADMIN
