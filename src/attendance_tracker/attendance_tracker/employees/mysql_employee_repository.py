from __future__ import annotations

from collections import defaultdict
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone
from .model import Employee, WageHistoryEntry
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _wage_history(self, cur, employee_ids: Sequence[str]) -> dict[str, tuple[WageHistoryEntry, ...]]:
        if not employee_ids:
            return {}
        placeholders = ",".join(["%s"] * len(employee_ids))
        cur.execute(
            f"""
            SELECT employee_id, hourly_rate, effective_date
            FROM wage_history
            WHERE employee_id IN ({placeholders})
            ORDER BY effective_date DESC
            """,
            tuple(employee_ids),
        )
        history: dict[str, list[WageHistoryEntry]] = defaultdict(list)
        for r in fetchall(cur):
            history[str(r["employee_id"])].append(
                WageHistoryEntry(hourly_rate=float(r["hourly_rate"]), effective_date=as_date(r["effective_date"]))
            )
        return {k: tuple(v) for k, v in history.items()}

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, role, hourly_rate FROM employees ORDER BY name ASC")
            rows = fetchall(cur)
            history = self._wage_history(cur, [str(r["id"]) for r in rows])
            return [
                Employee(
                    id=str(r["id"]),
                    name=r["name"],
                    role=r.get("role"),
                    hourly_rate=float(r["hourly_rate"]),
                    wage_history=history.get(str(r["id"]), ()),
                )
                for r in rows
            ]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, role, hourly_rate FROM employees WHERE id=%s", (employee_id,))
            r = fetchone(cur)
            if not r:
                return None
            history = self._wage_history(cur, [str(r["id"])])
            return Employee(
                id=str(r["id"]),
                name=r["name"],
                role=r.get("role"),
                hourly_rate=float(r["hourly_rate"]),
                wage_history=history.get(str(r["id"]), ()),
            )

    def add_wage_history(self, *, employee_id: str, entry: WageHistoryEntry) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO wage_history(employee_id, hourly_rate, effective_date) VALUES(%s,%s,%s)",
                (employee_id, entry.hourly_rate, entry.effective_date),
            )

    def update(self, employee: Employee) -> Employee:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET name=%s, role=%s, hourly_rate=%s WHERE id=%s",
                (employee.name, employee.role, employee.hourly_rate, employee.id),
            )
        return employee

    def delete(self, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE id=%s", (employee_id,))
            return cur.rowcount > 0
