from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's punches for one calendar day.

    Time fields are ``"HH:mm"`` strings relative to ``work_date``; hours
    past 23 encode an overnight shift. ``break_minutes``, when set, takes
    precedence over the ``break_start``/``break_end`` window.
    """

    id: str
    employee_id: str
    work_date: date
    clock_in: Optional[str] = None
    clock_out: Optional[str] = None
    break_start: Optional[str] = None
    break_end: Optional[str] = None
    break_minutes: Optional[int] = None
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "clockIn": self.clock_in,
            "clockOut": self.clock_out,
            "breakStart": self.break_start,
            "breakEnd": self.break_end,
            "breakMinutes": self.break_minutes,
            "note": self.note,
        }
