from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from attendance_tracker.allotments.model import AssignmentPlan, ShiftAllotment
from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.container import wire_services
from attendance_tracker.core.enums import EmploymentStatus, LogType
from attendance_tracker.employees.model import Employee
from attendance_tracker.shifts.model import NewShift, Shift, ShiftDay, ShiftDefinition


class InMemoryEmployees:
    def __init__(self, employees: list[Employee] | None = None):
        self.by_id: dict[int, Employee] = {e.employee_id: e for e in employees or []}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.by_id.get(employee_id)

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        return next((e for e in self.by_id.values() if e.employee_code == employee_code), None)

    def list_active(self):
        return [e for e in sorted(self.by_id.values(), key=lambda e: e.employee_id) if e.is_active]


class InMemoryAllotments:
    def __init__(self):
        self.rows: dict[int, ShiftAllotment] = {}
        self._id = 0

    def list_for_employee(self, employee_id: int):
        items = [a for a in self.rows.values() if a.employee_id == employee_id]
        return sorted(items, key=lambda a: (a.effective_from, a.allotment_id))

    def allotments_covering_date(self, employee_id: int, work_date: date):
        return [a for a in self.list_for_employee(employee_id) if a.covers(work_date)]

    def apply_plan(self, plan: AssignmentPlan) -> int:
        for allotment_id in plan.deletions:
            self.rows.pop(allotment_id, None)
        for a in plan.updates:
            self.rows[a.allotment_id] = a
        new_id = 0
        for n in plan.inserts:
            self._id += 1
            new_id = self._id
            self.rows[new_id] = ShiftAllotment(
                allotment_id=new_id,
                employee_id=n.employee_id,
                shift_id=n.shift_id,
                effective_from=n.effective_from,
                effective_to=n.effective_to,
            )
        return new_id

    def delete_for_shift(self, shift_id: int) -> None:
        for allotment_id in [k for k, a in self.rows.items() if a.shift_id == shift_id]:
            del self.rows[allotment_id]


class InMemoryShifts:
    def __init__(self, allotments: InMemoryAllotments):
        self.shifts: dict[int, Shift] = {}
        self._allotments = allotments
        self._id = 0

    def create(self, shift: NewShift) -> int:
        self._id += 1
        definition = ShiftDefinition(
            shift_id=self._id,
            shift_name=shift.shift_name,
            morning_in=shift.morning_in,
            morning_out=shift.morning_out,
            afternoon_in=shift.afternoon_in,
            afternoon_out=shift.afternoon_out,
            grace_period_minutes=shift.grace_period_minutes,
        )
        overrides = {o.weekday: replace(o, shift_id=self._id) for o in shift.overrides}
        self.shifts[self._id] = Shift(definition=definition, weekdays=frozenset(shift.weekdays), overrides=overrides)
        return self._id

    def get_by_id(self, shift_id: int):
        shift = self.shifts.get(shift_id)
        return shift.definition if shift else None

    def get_shift(self, shift_id: int):
        return self.shifts.get(shift_id)

    def list_all(self):
        return [self.shifts[k] for k in sorted(self.shifts)]

    def shifts_for_weekday(self, shift_id: int, weekday: int):
        shift = self.shifts.get(shift_id)
        if not shift or weekday not in shift.weekdays:
            return None
        return ShiftDay(definition=shift.definition, weekday=weekday, override=shift.overrides.get(weekday))

    def delete(self, shift_id: int) -> bool:
        self._allotments.delete_for_shift(shift_id)
        return self.shifts.pop(shift_id, None) is not None


class InMemoryAttendance:
    def __init__(self):
        self.by_employee_date: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self._lock = threading.Lock()

    def get_for_employee_and_date(self, employee_id: int, work_date: date):
        return self.by_employee_date.get((employee_id, work_date))

    def ensure_record(self, employee_id: int, work_date: date) -> AttendanceRecord:
        with self._lock:
            key = (employee_id, work_date)
            if key not in self.by_employee_date:
                self._id += 1
                self.by_employee_date[key] = AttendanceRecord(
                    attendance_id=self._id, employee_id=employee_id, work_date=work_date
                )
            return self.by_employee_date[key]

    def update_punch(
        self,
        *,
        attendance_id: int,
        expected_version: int,
        log_type: LogType,
        punch_time: time,
        minutes_late: int,
        minutes_early_leave: int,
        status: str,
    ) -> bool:
        with self._lock:
            for key, rec in self.by_employee_date.items():
                if rec.attendance_id != attendance_id:
                    continue
                if rec.version != expected_version:
                    return False
                self.by_employee_date[key] = replace(
                    rec,
                    minutes_late=minutes_late,
                    minutes_early_leave=minutes_early_leave,
                    status=status,
                    version=rec.version + 1,
                    **{log_type.field_name: punch_time},
                )
                return True
            return False

    def list_for_employee(self, employee_id: int, *, start: date, end: date):
        items = [r for (e, d), r in self.by_employee_date.items() if e == employee_id and start <= d <= end]
        return sorted(items, key=lambda r: r.work_date)


class RecordingAuditSink:
    def __init__(self):
        self.events = []

    def emit(self, event) -> None:
        self.events.append(event)


class Settings:
    DEFAULT_GRACE_PERIOD_MINUTES = 5
    ALLOTMENT_OVERLAP_POLICY = "truncate_prior"
    ATTENDANCE_STATUS_POLICY = "latest"
    PUNCH_CAS_RETRIES = 3


def make_employee(employee_id: int, code: str | None = None, status=EmploymentStatus.ACTIVE) -> Employee:
    return Employee(
        employee_id=employee_id,
        employee_code=code or f"E{employee_id}",
        first_name="Emp",
        last_name=str(employee_id),
        status=status,
    )


OFFICE_TIMES = {
    "morning_in": "08:00",
    "morning_out": "12:00",
    "afternoon_in": "13:00",
    "afternoon_out": "17:00",
}


@pytest.fixture
def fixed_now() -> datetime:
    # Monday.
    return datetime(2024, 1, 8, 8, 0, 0)


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees([make_employee(1), make_employee(2), make_employee(3, status=EmploymentStatus.INACTIVE)])


@pytest.fixture
def allotments_repo() -> InMemoryAllotments:
    return InMemoryAllotments()


@pytest.fixture
def shifts_repo(allotments_repo) -> InMemoryShifts:
    return InMemoryShifts(allotments_repo)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def audit_sink() -> RecordingAuditSink:
    return RecordingAuditSink()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def container(employees, shifts_repo, allotments_repo, attendance_repo, audit_sink, settings):
    return wire_services(
        employees_repo=employees,
        shifts_repo=shifts_repo,
        allotments_repo=allotments_repo,
        attendance_repo=attendance_repo,
        audit_sink=audit_sink,
        settings=settings,
    )


@pytest.fixture
def office_shift(container) -> int:
    """Shift ``Office``: 08:00/12:00/13:00/17:00, grace 10, Monday to Friday."""
    return container.shift_service.create_shift(
        name="Office",
        base_times=OFFICE_TIMES,
        grace_period=10,
        weekdays=[1, 2, 3, 4, 5],
    )
