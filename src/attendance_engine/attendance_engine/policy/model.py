from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Optional

from ..common.datetime_utils import format_hhmm, parse_hhmm
from ..common.validators import require_non_negative_int
from ..core.constants import (
    ABSENCE_GRACE_MINUTES,
    DEFAULT_BREAK_DURATION_MINUTES,
    DEFAULT_EARLY_LEAVE_THRESHOLD_MINUTES,
    DEFAULT_END_TIME,
    DEFAULT_LATE_THRESHOLD_MINUTES,
    DEFAULT_START_TIME,
)
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class WorkHoursPolicy:
    """Domain entity: working-hours configuration.

    Immutable for the duration of one evaluation; ``updated_at`` acts as the version.
    """

    start_time: time = DEFAULT_START_TIME
    end_time: time = DEFAULT_END_TIME
    late_threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES
    early_leave_threshold_minutes: int = DEFAULT_EARLY_LEAVE_THRESHOLD_MINUTES
    break_duration_minutes: int = DEFAULT_BREAK_DURATION_MINUTES
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        require_non_negative_int(self.late_threshold_minutes, "lateThreshold")
        require_non_negative_int(self.early_leave_threshold_minutes, "earlyLeaveThreshold")
        require_non_negative_int(self.break_duration_minutes, "breakDuration")
        if self.end_time <= self.start_time:
            raise ValidationError("endTime must be after startTime")

    @property
    def version(self) -> Optional[str]:
        return self.updated_at.isoformat(timespec="seconds") if self.updated_at else None

    def late_cutoff(self, work_date: date) -> datetime:
        return datetime.combine(work_date, self.start_time) + timedelta(minutes=self.late_threshold_minutes)

    def early_leave_cutoff(self, work_date: date) -> datetime:
        return datetime.combine(work_date, self.end_time) - timedelta(minutes=self.early_leave_threshold_minutes)

    def end_of_day(self, work_date: date) -> datetime:
        return datetime.combine(work_date, self.end_time)

    def absence_cutoff(self, work_date: date, *, grace_minutes: int = ABSENCE_GRACE_MINUTES) -> datetime:
        """Moment after which a day without any trace may be marked absent."""
        return self.end_of_day(work_date) + timedelta(minutes=grace_minutes)

    @property
    def standard_work_minutes(self) -> int:
        span = datetime.combine(date.min, self.end_time) - datetime.combine(date.min, self.start_time)
        return max(int(span.total_seconds() // 60) - self.break_duration_minutes, 0)

    def to_setting(self) -> dict[str, Any]:
        """Serialize using the keys of the ``work_hours`` system setting."""
        return {
            "startTime": format_hhmm(self.start_time),
            "endTime": format_hhmm(self.end_time),
            "lateThreshold": self.late_threshold_minutes,
            "earlyLeaveThreshold": self.early_leave_threshold_minutes,
            "breakDuration": self.break_duration_minutes,
        }

    @classmethod
    def from_setting(cls, value: dict[str, Any], *, updated_at: Optional[datetime] = None) -> "WorkHoursPolicy":
        try:
            return cls(
                start_time=parse_hhmm(str(value.get("startTime", format_hhmm(DEFAULT_START_TIME)))),
                end_time=parse_hhmm(str(value.get("endTime", format_hhmm(DEFAULT_END_TIME)))),
                late_threshold_minutes=require_non_negative_int(
                    value.get("lateThreshold", DEFAULT_LATE_THRESHOLD_MINUTES), "lateThreshold"
                ),
                early_leave_threshold_minutes=require_non_negative_int(
                    value.get("earlyLeaveThreshold", DEFAULT_EARLY_LEAVE_THRESHOLD_MINUTES), "earlyLeaveThreshold"
                ),
                break_duration_minutes=require_non_negative_int(
                    value.get("breakDuration", DEFAULT_BREAK_DURATION_MINUTES), "breakDuration"
                ),
                updated_at=updated_at,
            )
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
