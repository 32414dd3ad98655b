from __future__ import annotations

from datetime import date

from ..employees.model import Employee


def resolve_hourly_rate(employee: Employee, on_date: date) -> float:
    """Rate in force on ``on_date``: latest history entry not after it, else the flat rate."""
    applicable = [w for w in employee.wage_history if w.effective_date <= on_date]
    if not applicable:
        return employee.hourly_rate
    return max(applicable, key=lambda w: w.effective_date).hourly_rate


def normalize_effective_date(value: date) -> date:
    """Wage changes take effect from the first day of their month."""
    return value.replace(day=1)
