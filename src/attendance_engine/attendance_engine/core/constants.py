"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_START_TIME = time(8, 0)
DEFAULT_END_TIME = time(17, 0)
DEFAULT_LATE_THRESHOLD_MINUTES = 15
DEFAULT_EARLY_LEAVE_THRESHOLD_MINUTES = 15
DEFAULT_BREAK_DURATION_MINUTES = 60

ABSENCE_GRACE_MINUTES = 30
WORKING_DAYS_PER_MONTH = 22

LATE_DEDUCTION_FREE_MINUTES = 15
LATE_DEDUCTION_RATE_PER_HOUR = "0.10"
LATE_DEDUCTION_MAX_RATE = "0.50"

POLICY_SETTING_KEY = "work_hours"

DEFAULT_SWEEP_INTERVAL_MINUTES = 1
DEFAULT_SWEEP_LOOKBACK_DAYS = 1
