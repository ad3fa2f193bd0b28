"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LATE_GRACE_MINUTES = 15
DEFAULT_EARLY_LEAVE_MARGIN_MINUTES = 10

# Every N late/early-timeout incidents count as one extra absence.
LATE_EARLY_PER_ABSENCE = 3

DEFAULT_WARNING_THRESHOLD = 4
DEFAULT_FAILED_THRESHOLD = 8

DEFAULT_TIMEZONE = "Asia/Manila"

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

ENROLLMENT_SCOPE_KEY = "enrollment"
