from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import minutes_between, parse_time_of_day
from .model import AttendanceRecord


def break_minutes(record: AttendanceRecord) -> int:
    """Break length: stored minutes win, otherwise the break window, otherwise 0."""
    if record.break_minutes is not None:
        return int(record.break_minutes)
    return window_minutes(record.work_date, record.break_start, record.break_end) or 0


def window_minutes(day: date, start: Optional[str], end: Optional[str]) -> Optional[int]:
    """Length of a break window, or ``None`` unless both ends parse and end is after start."""
    start_at = parse_time_of_day(day, start)
    end_at = parse_time_of_day(day, end)
    if start_at is None or end_at is None or end_at <= start_at:
        return None
    return minutes_between(start_at, end_at)
