from __future__ import annotations

from datetime import date
from typing import Optional, Union

from ..attendance.repository import AttendanceRepository
from ..employees.repository import EmployeeRepository
from .calculator.base import PayCalculator
from .calculator.standard_calculator import StandardPayCalculator
from .summary import EmployeeSummary, MonthlyWindow, resolve_monthly_window, summarize_employees


class PayrollReportService:
    """Dashboard use case: load a snapshot and summarize it per employee."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayCalculator] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._calculator = calculator or StandardPayCalculator()

    def build_summary(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        month: Union[MonthlyWindow, date, None] = None,
    ) -> list[EmployeeSummary]:
        employees = sorted(self._employees.list_all(), key=lambda e: e.name)

        load_start = load_end = None
        if start or end or month:
            # The monthly window may reach outside [start, end]; load both.
            month_start, month_end = resolve_monthly_window([], start, end, month)
            load_start = min(start, month_start) if start else None
            load_end = max(end, month_end) if end else None

        records = list(self._attendance.list_records(start=load_start, end=load_end))
        return summarize_employees(employees, records, start, end, month, calculator=self._calculator)
