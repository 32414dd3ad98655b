"""Time-of-day arithmetic.

Punch times are stored as ``"HH:mm"`` strings relative to the record's
calendar day. Hours past 23 roll into the following day(s), so ``"26:00"``
on 2024-05-01 means 02:00 on 2024-05-02. All day boundaries are taken in
:data:`TIMEZONE`.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time, timedelta
from typing import Optional

import pytz

from ..core.constants import DEFAULT_TIMEZONE

TIMEZONE = pytz.timezone(DEFAULT_TIMEZONE)

TIME_OF_DAY_RE = re.compile(r"^([0-4]?[0-9]):[0-5][0-9]$")


def is_valid_time_format(value: Optional[str]) -> bool:
    return bool(value) and TIME_OF_DAY_RE.match(value) is not None


def start_of_day(day: date) -> datetime:
    return TIMEZONE.localize(datetime.combine(day, time.min))


def parse_time_of_day(day: date, value: Optional[str]) -> Optional[datetime]:
    """Resolve a time-of-day string against ``day``.

    Returns ``None`` for missing or malformed values instead of raising.
    """
    if not is_valid_time_format(value):
        return None
    hours, minutes = (int(part) for part in value.split(":"))
    return TIMEZONE.normalize(start_of_day(day) + timedelta(hours=hours, minutes=minutes))


def minutes_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)


def to_local(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return TIMEZONE.localize(moment)
    return moment.astimezone(TIMEZONE)


def format_time_of_day(record_date: date, moment: datetime) -> str:
    """Render ``moment`` relative to ``record_date`` (``"25:10"`` for 01:10 next day)."""
    local = to_local(moment)
    days = (local.date() - record_date).days
    if days > 0:
        return f"{local.hour + 24 * days}:{local.minute:02d}"
    return local.strftime("%H:%M")


def month_bounds(day: date) -> tuple[date, date]:
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current time in the business timezone.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now(TIMEZONE)


def today_local() -> date:
    return now_local().date()
