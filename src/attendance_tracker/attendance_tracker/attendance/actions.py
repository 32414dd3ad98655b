"""Clock actions as explicit variants, validated before they reach the service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional, Union

from ..common.validators import require_iso_date, require_non_empty, require_time_of_day
from ..core.enums import ClockActionKind
from ..core.exceptions import ValidationError

# Request bodies use camelCase keys.
_PAYLOAD_KEYS = {
    "clock_in": "clockIn",
    "clock_out": "clockOut",
    "break_start": "breakStart",
    "break_end": "breakEnd",
}


@dataclass(frozen=True)
class ClockIn:
    note: Optional[str] = None
    kind = ClockActionKind.CLOCK_IN


@dataclass(frozen=True)
class ClockOut:
    note: Optional[str] = None
    kind = ClockActionKind.CLOCK_OUT


@dataclass(frozen=True)
class BreakStart:
    note: Optional[str] = None
    kind = ClockActionKind.BREAK_START


@dataclass(frozen=True)
class BreakEnd:
    note: Optional[str] = None
    kind = ClockActionKind.BREAK_END


@dataclass(frozen=True)
class UpdateRecord:
    """Manual correction. ``changes`` holds only the time fields that were sent; ``None`` clears one."""

    record_id: str
    changes: Mapping[str, Optional[str]] = field(default_factory=dict)
    note: Optional[str] = None
    kind = ClockActionKind.UPDATE


@dataclass(frozen=True)
class CreateRecord:
    work_date: date
    employee_id: Optional[str] = None
    clock_in: Optional[str] = None
    clock_out: Optional[str] = None
    break_start: Optional[str] = None
    break_end: Optional[str] = None
    note: Optional[str] = None
    kind = ClockActionKind.CREATE


ClockAction = Union[ClockIn, ClockOut, BreakStart, BreakEnd, UpdateRecord, CreateRecord]

_PUNCHES = {
    ClockActionKind.CLOCK_IN: ClockIn,
    ClockActionKind.CLOCK_OUT: ClockOut,
    ClockActionKind.BREAK_START: BreakStart,
    ClockActionKind.BREAK_END: BreakEnd,
}


def _note(payload: Mapping[str, Any]) -> Optional[str]:
    note = payload.get("note")
    if note is None:
        return None
    if not isinstance(note, str):
        raise ValidationError("note must be a string")
    return note


def parse_clock_action(payload: Any) -> ClockAction:
    """Turn a JSON body into a typed action or raise :class:`ValidationError`."""
    if not isinstance(payload, Mapping):
        raise ValidationError("request body must be a JSON object")

    try:
        kind = ClockActionKind(payload.get("action"))
    except ValueError:
        raise ValidationError("action is missing or not supported") from None

    note = _note(payload)

    if kind in _PUNCHES:
        return _PUNCHES[kind](note=note)

    if kind == ClockActionKind.UPDATE:
        record_id = require_non_empty(payload.get("recordId"), "recordId")
        changes = {
            name: require_time_of_day(payload.get(key), key)
            for name, key in _PAYLOAD_KEYS.items()
            if key in payload
        }
        return UpdateRecord(record_id=record_id, changes=changes, note=note)

    times = {name: require_time_of_day(payload.get(key), key) for name, key in _PAYLOAD_KEYS.items()}
    employee_id = payload.get("employeeId")
    return CreateRecord(
        work_date=require_iso_date(payload.get("date"), "date"),
        employee_id=str(employee_id) if employee_id else None,
        note=note,
        **times,
    )
