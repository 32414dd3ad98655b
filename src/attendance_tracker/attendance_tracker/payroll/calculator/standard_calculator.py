from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ...attendance.breaks import break_minutes
from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import minutes_between, parse_time_of_day, start_of_day, to_local
from ...common.numbers import round_half_up
from ...core.constants import (
    DAILY_OVERTIME_THRESHOLD_MINUTES,
    NIGHT_RATE_MULTIPLIER,
    NIGHT_SHIFT_END_HOUR,
    NIGHT_SHIFT_START_HOUR,
    OVERTIME_RATE_MULTIPLIER,
)
from .base import ZERO_PAY, PayBreakdown, PayCalculator


def _overlap_minutes(start: datetime, end: datetime, window_start: datetime, window_end: datetime) -> int:
    return max(0, minutes_between(max(start, window_start), min(end, window_end)))


class StandardPayCalculator(PayCalculator):
    """Standard rule: (out - in) - break, plus 25% premiums for overtime and night minutes.

    The two premiums stack on the same minutes.
    """

    def _punches(self, record: AttendanceRecord) -> Optional[tuple[datetime, datetime]]:
        start = parse_time_of_day(record.work_date, record.clock_in)
        end = parse_time_of_day(record.work_date, record.clock_out)
        if start is None or end is None:
            return None
        return start, end

    def net_minutes(self, record: AttendanceRecord) -> Optional[int]:
        punches = self._punches(record)
        if punches is None:
            return None
        minutes = minutes_between(*punches) - break_minutes(record)
        if minutes <= 0:
            return None
        return minutes

    def night_overlap_minutes(self, start: datetime, end: datetime) -> int:
        """Minutes of ``[start, end)`` inside 22:00-05:00 anchored on the start's day."""
        day_start = start_of_day(to_local(start).date())
        night_start = day_start + timedelta(hours=NIGHT_SHIFT_START_HOUR)
        midnight = day_start + timedelta(days=1)
        night_end = midnight + timedelta(hours=NIGHT_SHIFT_END_HOUR)

        return _overlap_minutes(start, end, night_start, midnight) + _overlap_minutes(start, end, midnight, night_end)

    def calculate_pay(self, record: AttendanceRecord, hourly_rate: float) -> PayBreakdown:
        punches = self._punches(record)
        if punches is None:
            return ZERO_PAY

        start, end = punches
        net = max(0, minutes_between(start, end) - break_minutes(record))
        if net <= 0:
            return ZERO_PAY

        overtime = max(0, net - DAILY_OVERTIME_THRESHOLD_MINUTES)
        night = min(net, self.night_overlap_minutes(start, end))

        base_pay = net / 60 * hourly_rate
        overtime_premium = overtime / 60 * hourly_rate * OVERTIME_RATE_MULTIPLIER
        night_premium = night / 60 * hourly_rate * NIGHT_RATE_MULTIPLIER

        return PayBreakdown(
            hours=net / 60,
            pay=int(round_half_up(base_pay + overtime_premium + night_premium)),
            overtime_minutes=overtime,
            night_minutes=night,
        )


_standard = StandardPayCalculator()


def net_hours(record: AttendanceRecord) -> Optional[float]:
    return _standard.net_hours(record)


def night_overlap_minutes(start: datetime, end: datetime) -> int:
    return _standard.night_overlap_minutes(start, end)


def calculate_pay(record: AttendanceRecord, hourly_rate: float) -> PayBreakdown:
    return _standard.calculate_pay(record, hourly_rate)
