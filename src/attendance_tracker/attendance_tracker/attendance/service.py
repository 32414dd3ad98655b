from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import (
    format_time_of_day,
    minutes_between,
    now_local,
    parse_time_of_day,
    to_local,
    today_local,
)
from ..core.constants import OWN_RECORD_DAYS
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..employees.model import Actor
from ..payroll.summary import get_employee_records_within_days
from .actions import BreakEnd, BreakStart, ClockAction, ClockIn, ClockOut, CreateRecord, UpdateRecord
from .breaks import window_minutes
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

# Punches that may continue a shift opened the previous day.
_CONTINUING = (ClockOut, BreakStart, BreakEnd)


class AttendanceService:
    """Use case: record punches and manual corrections.

    Decides which record a punch belongs to (today's, or yesterday's still
    open record for an overnight shift) and writes times relative to that
    record's day.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def apply(self, actor: Actor, action: ClockAction, *, now: Optional[datetime] = None) -> AttendanceRecord:
        if not actor.employee_id and not actor.is_admin:
            raise AuthenticationError("an employee account is required")

        if isinstance(action, CreateRecord):
            return self._create(actor, action)
        if isinstance(action, UpdateRecord):
            return self._update(actor, action)
        return self._punch(actor, action, to_local(now or now_local()))

    def records_for_employee(
        self,
        employee_id: str,
        *,
        days: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        records = list(self._attendance.list_records(start=start, end=end, employee_id=employee_id))
        if not start and not end and days:
            return get_employee_records_within_days(employee_id, records, days)
        return records

    def own_records(
        self,
        actor: Actor,
        *,
        days: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        today: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """An employee's own records, by default the 14 days ending today, newest first."""
        if actor.is_admin or not actor.employee_id:
            raise AuthenticationError("an employee account is required")

        end = end or today or today_local()
        if not days or days <= 0:
            days = OWN_RECORD_DAYS
        start = start or end - timedelta(days=days - 1)
        return list(self._attendance.list_records(start=start, end=end, employee_id=actor.employee_id))

    def _create(self, actor: Actor, action: CreateRecord) -> AttendanceRecord:
        employee_id = actor.employee_id
        if actor.is_admin and action.employee_id:
            employee_id = action.employee_id
        if not employee_id:
            raise ValidationError("employee could not be determined")

        if self._attendance.get_for_employee_and_date(employee_id, action.work_date):
            raise ConflictError("a record for this date already exists")

        record = self._attendance.create(
            employee_id=employee_id,
            work_date=action.work_date,
            clock_in=action.clock_in,
            clock_out=action.clock_out,
            break_start=action.break_start,
            break_end=action.break_end,
            break_minutes=window_minutes(action.work_date, action.break_start, action.break_end) or 0,
            note=action.note,
        )
        logger.info("created record %s for employee %s on %s", record.id, employee_id, action.work_date)
        return record

    def _update(self, actor: Actor, action: UpdateRecord) -> AttendanceRecord:
        record = self._attendance.get_by_id(action.record_id)
        if not record:
            raise NotFoundError("record not found")
        if record.employee_id != actor.employee_id and not actor.is_admin:
            raise AuthorizationError("not allowed to edit this record")

        patched = replace(record, **action.changes, note=action.note if action.note is not None else record.note)
        day = patched.work_date

        start = parse_time_of_day(day, patched.clock_in)
        end = parse_time_of_day(day, patched.clock_out)
        if start and end:
            if end < start:
                raise ValidationError("clock-out must be after clock-in")
            break_start = parse_time_of_day(day, patched.break_start)
            break_end = parse_time_of_day(day, patched.break_end)
            if break_start and break_end and break_start < end < break_end:
                raise ValidationError("cannot clock out during a break")

        minutes = window_minutes(day, patched.break_start, patched.break_end)
        if minutes is not None:
            patched = replace(patched, break_minutes=minutes)

        logger.info("record %s corrected by %s", record.id, actor.employee_id or actor.role.value)
        return self._attendance.update(patched)

    def _current_record(self, employee_id: str, action: ClockAction, now: datetime) -> AttendanceRecord:
        today = now.date()
        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record and isinstance(action, _CONTINUING):
            record = self._attendance.get_open_for_employee_and_date(employee_id, today - timedelta(days=1))
            if record:
                logger.debug("continuing overnight record %s for employee %s", record.id, employee_id)
        if not record:
            record = self._attendance.create(employee_id=employee_id, work_date=today, note=action.note)
        return record

    def _punch(self, actor: Actor, action: ClockAction, now: datetime) -> AttendanceRecord:
        if not actor.employee_id:
            raise ValidationError("employee information not found")

        record = self._current_record(actor.employee_id, action, now)
        stamp = format_time_of_day(record.work_date, now)
        note = action.note if action.note is not None else record.note

        if isinstance(action, ClockIn):
            if record.clock_in:
                raise ConflictError("already clocked in")
            updated = replace(record, clock_in=stamp, note=note)
        elif isinstance(action, ClockOut):
            if record.clock_out:
                raise ConflictError("already clocked out")
            updated = replace(record, clock_out=stamp, note=note)
        elif isinstance(action, BreakStart):
            if not record.clock_in:
                raise ValidationError("clock in before starting a break")
            if record.break_start and not record.break_end:
                raise ConflictError("already on a break")
            updated = replace(record, break_start=stamp, break_end=None, break_minutes=None, note=note)
        elif isinstance(action, BreakEnd):
            if not record.break_start or record.break_end:
                raise ValidationError("start a break before ending it")
            started = parse_time_of_day(record.work_date, record.break_start)
            minutes = max(minutes_between(started, now), 0) if started else 0
            updated = replace(record, break_end=stamp, break_minutes=minutes, note=note)
        else:
            raise ValidationError("action is not supported")

        logger.info("%s for employee %s at %s", action.kind.value, actor.employee_id, stamp)
        return self._attendance.update(updated)
