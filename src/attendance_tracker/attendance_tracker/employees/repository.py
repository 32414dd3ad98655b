from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee, WageHistoryEntry


class EmployeeRepository(Protocol):
    def list_all(self) -> Sequence[Employee]:
        """Employees with their wage history, ordered by name."""

        raise NotImplementedError

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def add_wage_history(self, *, employee_id: str, entry: WageHistoryEntry) -> None:
        raise NotImplementedError

    def update(self, employee: Employee) -> Employee:
        raise NotImplementedError

    def delete(self, employee_id: str) -> bool:
        """Remove the employee; wage history and records go with it."""

        raise NotImplementedError
