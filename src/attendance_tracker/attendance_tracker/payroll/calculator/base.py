from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...attendance.model import AttendanceRecord


@dataclass(frozen=True)
class PayBreakdown:
    hours: float
    pay: int
    overtime_minutes: int
    night_minutes: int


ZERO_PAY = PayBreakdown(hours=0.0, pay=0, overtime_minutes=0, night_minutes=0)


class PayCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def net_minutes(self, record: AttendanceRecord) -> Optional[int]:
        raise NotImplementedError

    @abstractmethod
    def night_overlap_minutes(self, start: datetime, end: datetime) -> int:
        raise NotImplementedError

    @abstractmethod
    def calculate_pay(self, record: AttendanceRecord, hourly_rate: float) -> PayBreakdown:
        raise NotImplementedError

    def net_hours(self, record: AttendanceRecord) -> Optional[float]:
        minutes = self.net_minutes(record)
        if minutes is None:
            return None
        return minutes / 60
