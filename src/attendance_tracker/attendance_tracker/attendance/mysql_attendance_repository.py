from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "id, employee_id, work_date, clock_in, clock_out, break_start, break_end, break_minutes, note"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        work_date=as_date(r["work_date"]),
        clock_in=r.get("clock_in"),
        clock_out=r.get("clock_out"),
        break_start=r.get("break_start"),
        break_end=r.get("break_end"),
        break_minutes=int(r["break_minutes"]) if r.get("break_minutes") is not None else None,
        note=r.get("note"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE id=%s", (record_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_open_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                WHERE employee_id=%s AND work_date=%s
                  AND clock_in IS NOT NULL AND clock_out IS NULL
                """,
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_records(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        where = ["1=1"]
        params: list = []
        if start:
            where.append("work_date >= %s")
            params.append(start)
        if end:
            where.append("work_date <= %s")
            params.append(end)
        if employee_id:
            where.append("employee_id = %s")
            params.append(employee_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                WHERE {' AND '.join(where)}
                ORDER BY work_date DESC, employee_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

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
        record = AttendanceRecord(
            id=uuid.uuid4().hex,
            employee_id=employee_id,
            work_date=work_date,
            clock_in=clock_in,
            clock_out=clock_out,
            break_start=break_start,
            break_end=break_end,
            break_minutes=break_minutes,
            note=note,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO attendance_records({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)",
                (
                    record.id,
                    record.employee_id,
                    record.work_date,
                    record.clock_in,
                    record.clock_out,
                    record.break_start,
                    record.break_end,
                    record.break_minutes,
                    record.note,
                ),
            )
        return record

    def update(self, record: AttendanceRecord) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_in=%s, clock_out=%s, break_start=%s, break_end=%s, break_minutes=%s, note=%s
                WHERE id=%s
                """,
                (
                    record.clock_in,
                    record.clock_out,
                    record.break_start,
                    record.break_end,
                    record.break_minutes,
                    record.note,
                    record.id,
                ),
            )
        return record
