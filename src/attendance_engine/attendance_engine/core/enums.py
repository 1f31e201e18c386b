from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Employee role; admins never take part in reconciliation."""

    ADMIN = "admin"
    STAFF = "staff"


class EmploymentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class RecordType(str, Enum):
    """Kind of ledger row."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
    ABSENT = "absent"


class Outcome(str, Enum):
    """Validation outcome attached to a ledger row."""

    SUCCESS = "success"
    FACE_INVALID = "face_invalid"
    LOCATION_INVALID = "location_invalid"
    ABSENT = "absent"


class DayStatus(str, Enum):
    """Derived status of one employee-day (never persisted)."""

    NO_TRACE = "NO_TRACE"
    PRESENT_COMPLETE = "PRESENT_COMPLETE"
    PRESENT_PARTIAL = "PRESENT_PARTIAL"
    ABSENT = "ABSENT"


class CalendarStatus(str, Enum):
    """Per-date classification for the monthly calendar view."""

    WEEKEND = "WEEKEND"
    COMPLETE = "COMPLETE"
    PARTIAL_IN = "PARTIAL_IN"
    PARTIAL_OUT = "PARTIAL_OUT"
    ABSENT = "ABSENT"
    NO_DATA = "NO_DATA"
    FUTURE = "FUTURE"
