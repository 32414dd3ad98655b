from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord
from src.attendance_tracker.attendance_tracker.common.datetime_utils import TIMEZONE
from src.attendance_tracker.attendance_tracker.employees.model import Employee, WageHistoryEntry


class InMemoryAttendance:
    def __init__(self, records=()):
        self._by_id: dict[str, AttendanceRecord] = {r.id: r for r in records}

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        return self._by_id.get(record_id)

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        for r in self._by_id.values():
            if r.employee_id == employee_id and r.work_date == work_date:
                return r
        return None

    def get_open_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        r = self.get_for_employee_and_date(employee_id, work_date)
        if r and r.clock_in and not r.clock_out:
            return r
        return None

    def list_records(self, *, start=None, end=None, employee_id=None):
        self.last_list_args = {"start": start, "end": end, "employee_id": employee_id}
        items = [
            r
            for r in self._by_id.values()
            if (start is None or r.work_date >= start)
            and (end is None or r.work_date <= end)
            and (employee_id is None or r.employee_id == employee_id)
        ]
        items.sort(key=lambda r: r.employee_id)
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items

    def create(self, *, employee_id: str, work_date: date, **fields) -> AttendanceRecord:
        record = AttendanceRecord(id=uuid.uuid4().hex, employee_id=employee_id, work_date=work_date, **fields)
        self._by_id[record.id] = record
        return record

    def update(self, record: AttendanceRecord) -> AttendanceRecord:
        self._by_id[record.id] = record
        return record

    def all(self) -> list[AttendanceRecord]:
        return list(self._by_id.values())


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._by_id: dict[str, Employee] = {e.id: e for e in employees}

    def list_all(self):
        return list(self._by_id.values())

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def add_wage_history(self, *, employee_id: str, entry: WageHistoryEntry) -> None:
        employee = self._by_id[employee_id]
        history = tuple(sorted(employee.wage_history + (entry,), key=lambda w: w.effective_date, reverse=True))
        self._by_id[employee_id] = replace(employee, wage_history=history)

    def update(self, employee: Employee) -> Employee:
        self._by_id[employee.id] = employee
        return employee

    def delete(self, employee_id: str) -> bool:
        return self._by_id.pop(employee_id, None) is not None


@pytest.fixture
def employees():
    return [
        Employee(id="e-sato", name="Sato", hourly_rate=1000),
        Employee(id="e-abe", name="Abe", hourly_rate=1200),
    ]


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def employees_repo(employees):
    return InMemoryEmployees(employees)


@pytest.fixture
def fixed_now():
    return TIMEZONE.localize(datetime(2024, 5, 1, 9, 0))
