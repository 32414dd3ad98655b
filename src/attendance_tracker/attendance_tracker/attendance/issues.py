"""Per-day compliance checks."""

from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import minutes_between, parse_time_of_day
from ..core.constants import (
    DAILY_OVERTIME_THRESHOLD_MINUTES,
    LONG_SHIFT_MIN_BREAK_MINUTES,
    LONG_SHIFT_MINUTES,
    MEDIUM_SHIFT_MIN_BREAK_MINUTES,
    MEDIUM_SHIFT_MINUTES,
)
from ..core.enums import AttendanceIssue
from ..payroll.calculator.base import PayCalculator
from ..payroll.calculator.standard_calculator import StandardPayCalculator
from .breaks import break_minutes
from .model import AttendanceRecord


def has_insufficient_break(raw_minutes: int, taken_minutes: int) -> bool:
    # 8h rule first, then the 6h rule; either one yields a single flag.
    if raw_minutes > LONG_SHIFT_MINUTES and taken_minutes < LONG_SHIFT_MIN_BREAK_MINUTES:
        return True
    return raw_minutes > MEDIUM_SHIFT_MINUTES and taken_minutes < MEDIUM_SHIFT_MIN_BREAK_MINUTES


def detect_issues(record: AttendanceRecord, *, calculator: Optional[PayCalculator] = None) -> list[AttendanceIssue]:
    """Classify one day's record.

    Missing-punch flags depend only on the punch fields being present. The
    duration rules run only when both punches parse.
    """
    calculator = calculator or StandardPayCalculator()

    issues: list[AttendanceIssue] = []
    if not record.clock_in:
        issues.append(AttendanceIssue.MISSING_CLOCK_IN)
    if not record.clock_out:
        issues.append(AttendanceIssue.MISSING_CLOCK_OUT)

    start = parse_time_of_day(record.work_date, record.clock_in)
    end = parse_time_of_day(record.work_date, record.clock_out)
    if start is None or end is None:
        return issues

    if has_insufficient_break(minutes_between(start, end), break_minutes(record)):
        issues.append(AttendanceIssue.INSUFFICIENT_BREAK)
    if calculator.night_overlap_minutes(start, end) > 0:
        issues.append(AttendanceIssue.NIGHT_SHIFT)

    net = calculator.net_minutes(record)
    if net is not None and net > DAILY_OVERTIME_THRESHOLD_MINUTES:
        issues.append(AttendanceIssue.OVERWORK)
    return issues
