"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

REASON_MIN_LENGTH = 10
REASON_MAX_LENGTH = 500

HOLIDAY_NAME_MIN_LENGTH = 3
HOLIDAY_NAME_MAX_LENGTH = 50

DEFAULT_LEAVE_LEAD_DAYS = 0
DEFAULT_API_TIMEOUT_SECONDS = 10
DEFAULT_TOP_DEPARTMENTS = 3
