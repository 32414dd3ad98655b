from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class WageHistoryEntry:
    hourly_rate: float
    effective_date: date

    def to_dict(self) -> dict:
        return {"hourlyRate": self.hourly_rate, "effectiveDate": self.effective_date.strftime("%Y-%m-%d")}


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    ``wage_history`` lists past rate changes; ``hourly_rate`` is the flat
    current rate used when no history entry applies.
    """

    id: str
    name: str
    hourly_rate: float
    role: Optional[str] = None
    wage_history: tuple[WageHistoryEntry, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "hourlyRate": self.hourly_rate,
            "role": self.role,
            "wageHistory": [w.to_dict() for w in self.wage_history],
        }


@dataclass(frozen=True)
class Actor:
    """Who is acting, as read from the session."""

    employee_id: Optional[str]
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
