from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional

from ..audit.sink import AuditEmitter
from ..core.constants import DEFAULT_PUNCH_CAS_RETRIES
from ..core.enums import AttendanceStatus, AuditAction, LogType, StatusPolicy
from ..core.exceptions import (
    AttendanceAlreadyCompleteError,
    ConcurrentUpdateError,
    EmployeeNotFoundError,
    InvalidDateRangeError,
    InvalidLogTypeError,
    NoShiftAssignedError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..shifts.resolver import ShiftResolver
from .factory import PunchStrategyFactory
from .model import AttendanceRecord, PunchResult, next_log_type
from .repository import AttendanceRepository
from .summary import DailySummary, build_daily_summary

logger = logging.getLogger(__name__)

_SEVERITY = {
    AttendanceStatus.PRESENT.value: 0,
    AttendanceStatus.ON_TIME.value: 1,
    AttendanceStatus.EARLY_LEAVE.value: 2,
    AttendanceStatus.LATE.value: 3,
}


def parse_log_type(value: Any) -> LogType:
    if isinstance(value, LogType):
        return value
    if isinstance(value, str):
        token = value.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return LogType(token)
        except ValueError:
            pass
    raise InvalidLogTypeError(value)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        resolver: ShiftResolver,
        *,
        strategy_factory: PunchStrategyFactory | None = None,
        audit: AuditEmitter | None = None,
        status_policy: StatusPolicy = StatusPolicy.LATEST,
        cas_retries: int = DEFAULT_PUNCH_CAS_RETRIES,
    ):
        self._attendance = attendance
        self._employees = employees
        self._resolver = resolver
        self._factory = strategy_factory or PunchStrategyFactory()
        self._audit = audit or AuditEmitter()
        self._status_policy = StatusPolicy(status_policy)
        self._cas_retries = max(0, int(cas_retries))

    def _employee_by_code(self, employee_code: str) -> Employee:
        employee = self._employees.get_by_code(str(employee_code).strip()) if employee_code else None
        if not employee:
            raise EmployeeNotFoundError(employee_code, field="employee_code")
        return employee

    def _next_status(self, current: str, computed: Optional[AttendanceStatus]) -> str:
        if computed is None:
            return current
        if self._status_policy == StatusPolicy.WORST and _SEVERITY.get(current, 0) > _SEVERITY[computed.value]:
            return current
        return computed.value

    def log_attendance(
        self,
        employee_code: str,
        log_type: Any,
        *,
        now: datetime,
        actor: Optional[str] = None,
    ) -> PunchResult:
        """Manual punch for an explicit slot.

        Note: no sequencing check here; a slot that is already filled is overwritten.
        """

        employee = self._employee_by_code(employee_code)
        slot = parse_log_type(log_type)
        result = self._record_punch(employee, lambda record: slot, now=now)

        self._audit.emit(
            actor=actor or employee.employee_code,
            action=AuditAction.PUNCH,
            table_name="attendance_records",
            record_id=result.attendance_id,
            after=result.to_dict(),
        )
        return result

    def auto_detect_punch(
        self,
        employee_code: str,
        *,
        now: datetime,
        metadata: Mapping[str, Any] | None = None,
    ) -> PunchResult:
        """Face-scan/kiosk punch: the slot is always the next one in sequence."""

        employee = self._employee_by_code(employee_code)

        def _next_slot(record: AttendanceRecord) -> LogType:
            slot = next_log_type(record)
            if slot is None:
                raise AttendanceAlreadyCompleteError(employee.employee_id, record.work_date)
            return slot

        result = self._record_punch(employee, _next_slot, now=now)

        self._audit.emit(
            actor=employee.employee_code,
            action=AuditAction.SCAN,
            table_name="attendance_records",
            record_id=result.attendance_id,
            after={**result.to_dict(), "metadata": dict(metadata or {})},
        )
        return result

    def _record_punch(
        self,
        employee: Employee,
        choose_slot: Callable[[AttendanceRecord], LogType],
        *,
        now: datetime,
    ) -> PunchResult:
        today = now.date()
        punch_time = now.time().replace(microsecond=0)

        shift = self._resolver.resolve_shift(employee.employee_id, today)
        if shift is None:
            raise NoShiftAssignedError(employee.employee_id, today)

        for attempt in range(self._cas_retries + 1):
            record = self._attendance.ensure_record(employee.employee_id, today)
            slot = choose_slot(record)
            decision = self._factory.for_log_type(slot).evaluate(punch_time=punch_time, shift=shift)
            status = self._next_status(record.status, decision.status)

            written = self._attendance.update_punch(
                attendance_id=record.attendance_id,
                expected_version=record.version,
                log_type=slot,
                punch_time=punch_time,
                minutes_late=record.minutes_late + decision.minutes_late,
                minutes_early_leave=record.minutes_early_leave + decision.minutes_early,
                status=status,
            )
            if written:
                logger.info(
                    "employee %s %s at %s on %s: late=%d early=%d status=%s",
                    employee.employee_id,
                    slot.value,
                    punch_time,
                    today,
                    decision.minutes_late,
                    decision.minutes_early,
                    status,
                )
                return PunchResult(
                    attendance_id=record.attendance_id,
                    log_type=slot,
                    punch_time=punch_time,
                    minutes_late=decision.minutes_late,
                    minutes_early=decision.minutes_early,
                    status=status,
                )

            logger.info(
                "concurrent punch for employee %s on %s (attempt %d), re-reading",
                employee.employee_id,
                today,
                attempt + 1,
            )

        raise ConcurrentUpdateError(
            f"attendance for employee {employee.employee_id} on {today} kept changing; try again",
            field="work_date",
            value=today,
        )

    def list_records(self, employee_id: int, *, start: date, end: date) -> list[AttendanceRecord]:
        if end < start:
            raise InvalidDateRangeError("end must not be before start", field="to", value=end)
        if not self._employees.get_by_id(int(employee_id)):
            raise EmployeeNotFoundError(employee_id)
        return list(self._attendance.list_for_employee(int(employee_id), start=start, end=end))

    def daily_summary(self, employee_id: int, work_date: date) -> DailySummary:
        if not self._employees.get_by_id(int(employee_id)):
            raise EmployeeNotFoundError(employee_id)
        record = self._attendance.get_for_employee_and_date(int(employee_id), work_date)
        shift = self._resolver.resolve_shift(int(employee_id), work_date)
        return build_daily_summary(int(employee_id), work_date, record, shift)
