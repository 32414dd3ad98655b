from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_open_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        """Record that has a clock-in but no clock-out yet."""

        raise NotImplementedError

    def list_records(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Newest first, then by employee."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        work_date: date,
        clock_in: Optional[str] = None,
        clock_out: Optional[str] = None,
        break_start: Optional[str] = None,
        break_end: Optional[str] = None,
        break_minutes: Optional[int] = None,
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError
