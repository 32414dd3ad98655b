"""Constants and defaults.

Note: Thresholds are fixed business rules, not configuration.
"""

DAILY_OVERTIME_THRESHOLD_MINUTES = 8 * 60
WEEKLY_OVERTIME_THRESHOLD_HOURS = 40

LONG_SHIFT_MINUTES = 8 * 60
LONG_SHIFT_MIN_BREAK_MINUTES = 60
MEDIUM_SHIFT_MINUTES = 6 * 60
MEDIUM_SHIFT_MIN_BREAK_MINUTES = 45

NIGHT_SHIFT_START_HOUR = 22
NIGHT_SHIFT_END_HOUR = 5

OVERTIME_RATE_MULTIPLIER = 0.25
NIGHT_RATE_MULTIPLIER = 0.25

DEFAULT_TIMEZONE = "Asia/Tokyo"
DEFAULT_RECORD_DAYS = 30
OWN_RECORD_DAYS = 14
