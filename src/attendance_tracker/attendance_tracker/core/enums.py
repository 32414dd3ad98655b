from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Session role used for authorization checks."""

    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


class AttendanceIssue(str, Enum):
    """Compliance flags attached to a single day's record."""

    MISSING_CLOCK_IN = "missingClockIn"
    MISSING_CLOCK_OUT = "missingClockOut"
    OVERWORK = "overwork"
    INSUFFICIENT_BREAK = "insufficientBreak"
    NIGHT_SHIFT = "nightShift"


class ClockActionKind(str, Enum):
    CLOCK_IN = "clockIn"
    CLOCK_OUT = "clockOut"
    BREAK_START = "breakStart"
    BREAK_END = "breakEnd"
    UPDATE = "update"
    CREATE = "create"
