"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60

DEFAULT_START_TIME = "09:00"
DEFAULT_LATE_GRACE_MINUTES = 0
DEFAULT_WORKING_DAYS = "Mon,Tue,Wed,Thu,Fri"
DEFAULT_WORKING_HOURS_PER_DAY = 8.0

# Prefill of the add-attendance forms (``GET /api/attendance/members``).
DEFAULT_PUNCH_IN = "09:00"
DEFAULT_PUNCH_OUT = "18:00"

EMPTY_PLACEHOLDER = "—"

DEFAULT_REQUEST_TIMEOUT = 30
