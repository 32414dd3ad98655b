"""Fold daily records into per-employee range and monthly summaries.

Everything here is a pure function of its inputs: summaries are recomputed
on every request and never stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from operator import attrgetter
from typing import Iterable, Optional, Sequence, Union

from ..attendance.issues import detect_issues
from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import month_bounds, today_local
from ..common.numbers import round_half_up
from ..core.constants import WEEKLY_OVERTIME_THRESHOLD_HOURS
from ..core.enums import AttendanceIssue
from ..employees.model import Employee
from .calculator.base import PayCalculator
from .calculator.standard_calculator import StandardPayCalculator
from .rates import resolve_hourly_rate


@dataclass(frozen=True)
class MonthlyWindow:
    """Explicit monthly bounds; a missing bound falls back to the anchor's month edge."""

    start: Optional[date] = None
    end: Optional[date] = None


@dataclass(frozen=True)
class RecordAggregate:
    records: list[AttendanceRecord]
    total_hours: float
    estimated_pay: int
    missing_count: int
    overwork_count: int
    latest_record: Optional[AttendanceRecord]
    issues: list[AttendanceIssue]

    def to_dict(self) -> dict:
        return {
            "records": [r.to_dict() for r in self.records],
            "totalHours": self.total_hours,
            "estimatedPay": self.estimated_pay,
            "missingCount": self.missing_count,
            "overworkCount": self.overwork_count,
            "latestRecord": self.latest_record.to_dict() if self.latest_record else None,
            "issues": [i.value for i in self.issues],
        }


@dataclass(frozen=True)
class MonthlySummary(RecordAggregate):
    start_date: date
    end_date: date

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["startDate"] = self.start_date.strftime("%Y-%m-%d")
        data["endDate"] = self.end_date.strftime("%Y-%m-%d")
        return data


@dataclass(frozen=True)
class EmployeeSummary(RecordAggregate):
    employee: Employee
    monthly: MonthlySummary

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["employee"] = self.employee.to_dict()
        data["monthly"] = self.monthly.to_dict()
        return data


def is_within_range(day: date, start: Optional[date] = None, end: Optional[date] = None) -> bool:
    if start and day < start:
        return False
    if end and day > end:
        return False
    return True


def filter_records_by_date_range(
    records: Iterable[AttendanceRecord],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[AttendanceRecord]:
    return [r for r in records if is_within_range(r.work_date, start, end)]


def get_latest_dataset_date(records: Sequence[AttendanceRecord]) -> Optional[date]:
    if not records:
        return None
    return max(r.work_date for r in records)


def get_employee_records_within_days(
    employee_id: str,
    records: Sequence[AttendanceRecord],
    days: int,
) -> list[AttendanceRecord]:
    """The employee's records in the ``days`` days ending at the dataset's latest date, newest first."""
    base = get_latest_dataset_date(records)
    if base is None or days <= 0:
        return []
    start = base - timedelta(days=days - 1)
    window = [r for r in filter_records_by_date_range(records, start, base) if r.employee_id == employee_id]
    return sorted(window, key=attrgetter("work_date"), reverse=True)


def resolve_monthly_window(
    records: Sequence[AttendanceRecord],
    range_start: Optional[date] = None,
    range_end: Optional[date] = None,
    monthly: Union[MonthlyWindow, date, None] = None,
) -> tuple[date, date]:
    if isinstance(monthly, date):
        return month_bounds(monthly)

    fallback = range_end or range_start or get_latest_dataset_date(records) or today_local()
    window = monthly or MonthlyWindow()
    first, last = month_bounds(window.start or window.end or fallback)
    return window.start or first, window.end or last


def _unique(issues: Iterable[AttendanceIssue]) -> list[AttendanceIssue]:
    return list(dict.fromkeys(issues))


def aggregate_records(
    employee: Employee,
    records: list[AttendanceRecord],
    *,
    apply_weekly_threshold: bool = True,
    calculator: Optional[PayCalculator] = None,
) -> RecordAggregate:
    """Totals, counters and issue union for one employee's records.

    ``overwork_count`` counts days flagged ``overwork`` or
    ``insufficientBreak``. With ``apply_weekly_threshold`` a total above
    40 hours adds one more ``overwork`` signal for the whole set.
    """
    calculator = calculator or StandardPayCalculator()

    total_hours = 0.0
    total_pay = 0
    missing_count = 0
    overwork_count = 0
    seen: list[AttendanceIssue] = []

    for record in records:
        issues = detect_issues(record, calculator=calculator)
        seen.extend(issues)
        if AttendanceIssue.MISSING_CLOCK_IN in issues:
            missing_count += 1
        if AttendanceIssue.MISSING_CLOCK_OUT in issues:
            missing_count += 1
        if AttendanceIssue.OVERWORK in issues or AttendanceIssue.INSUFFICIENT_BREAK in issues:
            overwork_count += 1

        breakdown = calculator.calculate_pay(record, resolve_hourly_rate(employee, record.work_date))
        total_hours += breakdown.hours
        total_pay += breakdown.pay

    if apply_weekly_threshold and total_hours > WEEKLY_OVERTIME_THRESHOLD_HOURS:
        overwork_count += 1
        seen.append(AttendanceIssue.OVERWORK)

    return RecordAggregate(
        records=records,
        total_hours=round_half_up(total_hours, 1),
        estimated_pay=int(round_half_up(total_pay)),
        missing_count=missing_count,
        overwork_count=overwork_count,
        latest_record=max(records, key=attrgetter("work_date")) if records else None,
        issues=_unique(seen),
    )


def summarize_employees(
    employees: Sequence[Employee],
    records: Sequence[AttendanceRecord],
    range_start: Optional[date] = None,
    range_end: Optional[date] = None,
    monthly: Union[MonthlyWindow, date, None] = None,
    *,
    calculator: Optional[PayCalculator] = None,
) -> list[EmployeeSummary]:
    """One summary per employee, in the order given."""
    calculator = calculator or StandardPayCalculator()

    range_records = filter_records_by_date_range(records, range_start, range_end)
    month_start, month_end = resolve_monthly_window(records, range_start, range_end, monthly)
    monthly_records = filter_records_by_date_range(records, month_start, month_end)

    summaries = []
    for employee in employees:
        own_range = [r for r in range_records if r.employee_id == employee.id]
        own_month = [r for r in monthly_records if r.employee_id == employee.id]

        ranged = aggregate_records(employee, own_range, calculator=calculator)
        month = aggregate_records(employee, own_month, apply_weekly_threshold=False, calculator=calculator)

        summaries.append(
            EmployeeSummary(
                **vars(ranged),
                employee=employee,
                monthly=MonthlySummary(**vars(month), start_date=month_start, end_date=month_end),
            )
        )
    return summaries
