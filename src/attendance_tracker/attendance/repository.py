from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import LogType
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def ensure_record(self, employee_id: int, work_date: date) -> AttendanceRecord:
        """Return the (employee, date) record, creating an empty one if absent."""

        raise NotImplementedError

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
        """Compare-and-swap write of one punch plus the new cumulative totals.

        Returns False when ``expected_version`` no longer matches (a concurrent
        punch won the race); nothing is written in that case.
        """

        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
