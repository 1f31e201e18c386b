class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced employee or record does not exist."""


class ConfigUnavailable(DomainError):
    """Raised when the work-hours policy cannot be loaded and nothing is cached."""


class RosterFetchFailed(DomainError):
    """Raised when the employee roster cannot be read; the pass is aborted."""


class LedgerFetchFailed(DomainError):
    """Raised when attendance records cannot be read; the pass is aborted."""


class WriteConflict(DomainError):
    """Another writer already inserted the same logical row.

    Expected and benign for absence inserts: treated as already reconciled.
    """


class InvariantViolation(DomainError):
    """An absent row coexists with a successful check-in for the same day.

    Never auto-corrected; surfaced for manual review.
    """

    def __init__(self, employee_id: int, work_date):
        super().__init__(f"employee {employee_id} is both absent and checked in on {work_date}")
        self.employee_id = employee_id
        self.work_date = work_date


class StatsUnavailable(DomainError):
    """Read-path aggregation failed; dashboards show "stats unavailable"."""
