from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_iso_date, require_non_empty, require_positive_number
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError
from ..payroll.rates import normalize_effective_date
from .model import Actor, Employee, WageHistoryEntry
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def _require_admin(actor: Actor) -> None:
    if not actor.is_admin:
        raise AuthorizationError("administrator login required")


class EmployeeService:
    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self) -> Sequence[Employee]:
        return sorted(self._employees.list_all(), key=lambda e: e.name)

    def get(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("employee not found")
        return employee

    def update_employee(
        self,
        actor: Actor,
        employee_id: str,
        *,
        name: Optional[str] = None,
        hourly_rate=None,
        role: Optional[str] = None,
    ) -> Employee:
        """Change name, flat rate or role. ``None`` leaves a field as it is."""
        _require_admin(actor)
        employee = self.get(employee_id)

        changes = {}
        if name is not None:
            changes["name"] = require_non_empty(name, "name")
        if hourly_rate is not None:
            changes["hourly_rate"] = require_positive_number(hourly_rate, "hourly_rate")
        if role is not None:
            changes["role"] = str(role).strip() or None

        updated = self._employees.update(replace(employee, **changes))
        logger.info("employee %s updated: %s", employee.id, ", ".join(sorted(changes)) or "no changes")
        return updated

    def delete_employee(self, actor: Actor, employee_id: str) -> None:
        _require_admin(actor)
        if not self._employees.delete(employee_id):
            raise NotFoundError("employee not found")
        logger.info("employee %s deleted", employee_id)

    def add_wage_history(
        self,
        actor: Actor,
        *,
        employee_id: str,
        hourly_rate,
        effective_date,
    ) -> WageHistoryEntry:
        """Record a rate change effective from the first day of ``effective_date``'s month."""
        _require_admin(actor)

        rate = require_positive_number(hourly_rate, "hourly_rate")
        if not isinstance(effective_date, date):
            effective_date = require_iso_date(effective_date, "effective_date")

        employee = self.get(employee_id)
        entry = WageHistoryEntry(hourly_rate=rate, effective_date=normalize_effective_date(effective_date))
        if any(w.effective_date == entry.effective_date for w in employee.wage_history):
            raise ConflictError("a wage entry for this month already exists")

        self._employees.add_wage_history(employee_id=employee.id, entry=entry)
        logger.info("employee %s rate %s from %s", employee.id, rate, entry.effective_date)
        return entry
