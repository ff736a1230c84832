from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..common.time_literals import format_time
from ..core.enums import PUNCH_SEQUENCE, AttendanceStatus, LogType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's punches for one calendar date.

    ``version`` increases on every write and guards concurrent punches.
    """

    attendance_id: int
    employee_id: int
    work_date: date
    morning_in: Optional[time] = None
    morning_out: Optional[time] = None
    afternoon_in: Optional[time] = None
    afternoon_out: Optional[time] = None
    minutes_late: int = 0
    minutes_early_leave: int = 0
    status: str = AttendanceStatus.PRESENT.value
    version: int = 0

    def punch(self, log_type: LogType) -> Optional[time]:
        return getattr(self, log_type.field_name)

    @property
    def is_empty(self) -> bool:
        return all(self.punch(t) is None for t in PUNCH_SEQUENCE)

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "employee_id": self.employee_id,
            "work_date": self.work_date.isoformat(),
            "morning_in": format_time(self.morning_in),
            "morning_out": format_time(self.morning_out),
            "afternoon_in": format_time(self.afternoon_in),
            "afternoon_out": format_time(self.afternoon_out),
            "minutes_late": self.minutes_late,
            "minutes_early_leave": self.minutes_early_leave,
            "status": self.status,
        }


def next_log_type(record: Optional[AttendanceRecord]) -> Optional[LogType]:
    """The next slot in the fixed in/out sequence; ``None`` once all four are set."""

    if record is None or record.morning_in is None:
        return LogType.MORNING_IN
    if record.morning_out is None:
        return LogType.MORNING_OUT
    if record.afternoon_in is None:
        return LogType.AFTERNOON_IN
    if record.afternoon_out is None:
        return LogType.AFTERNOON_OUT
    return None


@dataclass(frozen=True)
class PunchResult:
    attendance_id: int
    log_type: LogType
    punch_time: time
    minutes_late: int
    minutes_early: int
    status: str

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "log_type": self.log_type.value,
            "punch_time": format_time(self.punch_time),
            "minutes_late": self.minutes_late,
            "minutes_early": self.minutes_early,
            "status": self.status,
        }
