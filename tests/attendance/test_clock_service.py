from __future__ import annotations

from datetime import date, timedelta

import pytest

from src.attendance_tracker.attendance_tracker.attendance.actions import (
    BreakEnd,
    BreakStart,
    ClockIn,
    ClockOut,
    CreateRecord,
    UpdateRecord,
)
from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord
from src.attendance_tracker.attendance_tracker.attendance.service import AttendanceService
from src.attendance_tracker.attendance_tracker.core.enums import Role
from src.attendance_tracker.attendance_tracker.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.attendance_tracker.attendance_tracker.employees.model import Actor

SATO = Actor(employee_id="e-sato", role=Role.EMPLOYEE)
ADMIN = Actor(employee_id=None, role=Role.ADMIN)


@pytest.fixture
def svc(attendance_repo):
    return AttendanceService(attendance_repo)


def test_full_day_of_punches(svc, fixed_now):
    svc.apply(SATO, ClockIn(), now=fixed_now)
    svc.apply(SATO, BreakStart(), now=fixed_now + timedelta(hours=3))
    svc.apply(SATO, BreakEnd(), now=fixed_now + timedelta(hours=3, minutes=50))
    record = svc.apply(SATO, ClockOut(note="done"), now=fixed_now + timedelta(hours=9, minutes=5))

    assert record.work_date == date(2024, 5, 1)
    assert (record.clock_in, record.clock_out) == ("09:00", "18:05")
    assert (record.break_start, record.break_end, record.break_minutes) == ("12:00", "12:50", 50)
    assert record.note == "done"


def test_double_clock_in_conflicts(svc, fixed_now):
    svc.apply(SATO, ClockIn(), now=fixed_now)

    with pytest.raises(ConflictError):
        svc.apply(SATO, ClockIn(), now=fixed_now + timedelta(minutes=1))


def test_double_clock_out_conflicts(svc, fixed_now):
    svc.apply(SATO, ClockIn(), now=fixed_now)
    svc.apply(SATO, ClockOut(), now=fixed_now + timedelta(hours=8))

    with pytest.raises(ConflictError):
        svc.apply(SATO, ClockOut(), now=fixed_now + timedelta(hours=9))


def test_overnight_clock_out_continues_yesterdays_record(svc, attendance_repo, fixed_now):
    evening = fixed_now + timedelta(hours=13)  # 22:00
    svc.apply(SATO, ClockIn(), now=evening)

    record = svc.apply(SATO, ClockOut(), now=evening + timedelta(hours=8, minutes=10))

    assert record.work_date == date(2024, 5, 1)
    assert (record.clock_in, record.clock_out) == ("22:00", "30:10")
    assert len(attendance_repo.all()) == 1


def test_overnight_break_uses_overflow_times(svc, fixed_now):
    evening = fixed_now + timedelta(hours=13)
    svc.apply(SATO, ClockIn(), now=evening)
    svc.apply(SATO, BreakStart(), now=evening + timedelta(hours=1, minutes=45))  # 23:45

    record = svc.apply(SATO, BreakEnd(), now=evening + timedelta(hours=2, minutes=30))  # 00:30

    assert (record.break_start, record.break_end, record.break_minutes) == ("23:45", "24:30", 45)


def test_clock_in_does_not_continue_yesterday(svc, attendance_repo, fixed_now):
    svc.apply(SATO, ClockIn(), now=fixed_now - timedelta(hours=11))  # 22:00 the day before

    record = svc.apply(SATO, ClockIn(), now=fixed_now)

    assert record.work_date == date(2024, 5, 1)
    assert len(attendance_repo.all()) == 2


def test_clock_out_without_any_record_starts_todays_record(svc, fixed_now):
    record = svc.apply(SATO, ClockOut(), now=fixed_now)

    assert record.clock_in is None
    assert record.clock_out == "09:00"


def test_break_start_requires_clock_in(svc, fixed_now):
    with pytest.raises(ValidationError):
        svc.apply(SATO, BreakStart(), now=fixed_now)


def test_break_start_while_on_break_conflicts(svc, fixed_now):
    svc.apply(SATO, ClockIn(), now=fixed_now)
    svc.apply(SATO, BreakStart(), now=fixed_now + timedelta(hours=3))

    with pytest.raises(ConflictError):
        svc.apply(SATO, BreakStart(), now=fixed_now + timedelta(hours=3, minutes=5))


def test_second_break_replaces_first(svc, fixed_now):
    svc.apply(SATO, ClockIn(), now=fixed_now)
    svc.apply(SATO, BreakStart(), now=fixed_now + timedelta(hours=3))
    svc.apply(SATO, BreakEnd(), now=fixed_now + timedelta(hours=3, minutes=30))

    record = svc.apply(SATO, BreakStart(), now=fixed_now + timedelta(hours=5))

    assert (record.break_start, record.break_end, record.break_minutes) == ("14:00", None, None)


def test_break_end_requires_open_break(svc, fixed_now):
    svc.apply(SATO, ClockIn(), now=fixed_now)

    with pytest.raises(ValidationError):
        svc.apply(SATO, BreakEnd(), now=fixed_now + timedelta(hours=1))


def test_admin_without_employee_cannot_punch(svc, fixed_now):
    with pytest.raises(ValidationError):
        svc.apply(ADMIN, ClockIn(), now=fixed_now)


def test_actor_without_employee_or_admin_role_is_rejected(svc, fixed_now):
    with pytest.raises(AuthenticationError):
        svc.apply(Actor(employee_id=None, role=Role.EMPLOYEE), ClockIn(), now=fixed_now)


def test_create_computes_break_from_window(svc):
    record = svc.apply(
        SATO,
        CreateRecord(work_date=date(2024, 4, 30), clock_in="09:00", clock_out="18:00", break_start="12:00", break_end="12:45"),
    )

    assert record.employee_id == "e-sato"
    assert record.break_minutes == 45


def test_create_without_break_window_stores_zero(svc):
    record = svc.apply(SATO, CreateRecord(work_date=date(2024, 4, 30), clock_in="09:00"))

    assert record.break_minutes == 0


def test_create_duplicate_day_conflicts(svc):
    svc.apply(SATO, CreateRecord(work_date=date(2024, 4, 30)))

    with pytest.raises(ConflictError):
        svc.apply(SATO, CreateRecord(work_date=date(2024, 4, 30)))


def test_admin_creates_for_other_employee_but_employee_cannot(svc):
    admin_made = svc.apply(ADMIN, CreateRecord(work_date=date(2024, 4, 30), employee_id="e-abe"))
    own = svc.apply(SATO, CreateRecord(work_date=date(2024, 4, 29), employee_id="e-abe"))

    assert admin_made.employee_id == "e-abe"
    assert own.employee_id == "e-sato"


def test_admin_create_requires_target_employee(svc):
    with pytest.raises(ValidationError):
        svc.apply(ADMIN, CreateRecord(work_date=date(2024, 4, 30)))


@pytest.fixture
def existing(attendance_repo):
    record = AttendanceRecord(
        id="r1",
        employee_id="e-sato",
        work_date=date(2024, 5, 1),
        clock_in="09:00",
        clock_out="18:00",
        break_start="12:00",
        break_end="13:00",
        break_minutes=60,
        note="on site",
    )
    return attendance_repo.update(record)


def test_update_recomputes_break_minutes(svc, existing):
    record = svc.apply(SATO, UpdateRecord(record_id="r1", changes={"break_end": "12:30"}))

    assert record.break_minutes == 30
    assert record.note == "on site"


def test_update_clears_field(svc, existing):
    record = svc.apply(SATO, UpdateRecord(record_id="r1", changes={"clock_out": None}, note="forgot"))

    assert record.clock_out is None
    assert record.note == "forgot"


def test_update_rejects_clock_out_before_clock_in(svc, existing):
    with pytest.raises(ValidationError):
        svc.apply(SATO, UpdateRecord(record_id="r1", changes={"clock_out": "08:00"}))


def test_update_rejects_clock_out_inside_break(svc, existing):
    with pytest.raises(ValidationError):
        svc.apply(SATO, UpdateRecord(record_id="r1", changes={"clock_out": "12:30"}))


def test_update_allows_clock_out_at_break_end(svc, existing):
    record = svc.apply(SATO, UpdateRecord(record_id="r1", changes={"clock_out": "13:00"}))

    assert record.clock_out == "13:00"


def test_update_accepts_overnight_clock_out(svc, existing):
    record = svc.apply(SATO, UpdateRecord(record_id="r1", changes={"clock_out": "26:00"}))

    assert record.clock_out == "26:00"


def test_update_missing_record(svc):
    with pytest.raises(NotFoundError):
        svc.apply(SATO, UpdateRecord(record_id="nope"))


def test_update_other_employees_record(svc, existing):
    with pytest.raises(AuthorizationError):
        svc.apply(Actor(employee_id="e-abe", role=Role.EMPLOYEE), UpdateRecord(record_id="r1"))

    assert svc.apply(ADMIN, UpdateRecord(record_id="r1", changes={"clock_in": "08:30"})).clock_in == "08:30"


def test_records_for_employee_last_days(svc, attendance_repo):
    for i, day in enumerate([date(2024, 5, 1), date(2024, 5, 6), date(2024, 5, 8)]):
        attendance_repo.update(AttendanceRecord(id=f"r{i}", employee_id="e-sato", work_date=day))
    attendance_repo.update(AttendanceRecord(id="x", employee_id="e-abe", work_date=date(2024, 5, 9)))

    recent = svc.records_for_employee("e-sato", days=7)
    ranged = svc.records_for_employee("e-sato", days=7, start=date(2024, 5, 1), end=date(2024, 5, 6))

    assert [r.id for r in recent] == ["r2", "r1"]
    assert [r.id for r in ranged] == ["r1", "r0"]


def test_own_records_default_to_two_weeks_ending_today(svc, attendance_repo):
    for i, day in enumerate([date(2024, 4, 17), date(2024, 4, 18), date(2024, 5, 1)]):
        attendance_repo.update(AttendanceRecord(id=f"r{i}", employee_id="e-sato", work_date=day))
    attendance_repo.update(AttendanceRecord(id="x", employee_id="e-abe", work_date=date(2024, 4, 30)))

    records = svc.own_records(SATO, today=date(2024, 5, 1))

    assert [r.id for r in records] == ["r2", "r1"]
    assert attendance_repo.last_list_args == {
        "start": date(2024, 4, 18),
        "end": date(2024, 5, 1),
        "employee_id": "e-sato",
    }


def test_own_records_with_days_and_explicit_bounds(svc, attendance_repo):
    svc.own_records(SATO, days=3, end=date(2024, 5, 10))
    assert attendance_repo.last_list_args["start"] == date(2024, 5, 8)

    svc.own_records(SATO, days=0, start=date(2024, 1, 1), end=date(2024, 1, 31))
    assert (attendance_repo.last_list_args["start"], attendance_repo.last_list_args["end"]) == (
        date(2024, 1, 1),
        date(2024, 1, 31),
    )


def test_own_records_require_employee_account(svc):
    with pytest.raises(AuthenticationError):
        svc.own_records(ADMIN)
