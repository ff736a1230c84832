"""Read-side daily summary: per-slot classification and the overall day label.

Nothing here mutates a record; reports call it on stored data.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Mapping, Optional

from ..common.time_literals import format_time
from ..core.enums import (
    ENTRY_SLOTS,
    EXIT_SLOTS,
    PUNCH_SEQUENCE,
    AttendanceStatus,
    LogType,
    PunchClassification,
)
from ..shifts.model import ResolvedShift
from .model import AttendanceRecord
from .strategies.base import whole_minutes_after, whole_minutes_before


def classify_punch(log_type: LogType, actual: time, required: time, grace_minutes: int) -> PunchClassification:
    late = whole_minutes_after(actual, required)
    early = whole_minutes_before(actual, required)
    if log_type in ENTRY_SLOTS:
        if late > grace_minutes:
            return PunchClassification.LATE
        if early > grace_minutes:
            return PunchClassification.EARLY_IN
        return PunchClassification.ON_TIME

    if early > grace_minutes:
        return PunchClassification.EARLY_OUT
    if late > grace_minutes:
        return PunchClassification.LATE_OUT
    return PunchClassification.ON_TIME


def classify_punches(
    record: Optional[AttendanceRecord], shift: Optional[ResolvedShift]
) -> dict[LogType, PunchClassification]:
    if record is None or record.is_empty:
        return {t: PunchClassification.ABSENT for t in PUNCH_SEQUENCE}
    if shift is None:
        return {t: PunchClassification.NO_SHIFT for t in PUNCH_SEQUENCE}

    out: dict[LogType, PunchClassification] = {}
    for t in PUNCH_SEQUENCE:
        actual = record.punch(t)
        if actual is None:
            out[t] = PunchClassification.MISSING
        else:
            out[t] = classify_punch(t, actual, shift.required_time(t), shift.grace_period_minutes)
    return out


def summarize_day(
    record: Optional[AttendanceRecord], classifications: Mapping[LogType, PunchClassification]
) -> str:
    """Overall label, by fixed precedence: Absent, Late, Early Leave, stored status."""

    if record is None or record.is_empty:
        return AttendanceStatus.ABSENT.value
    if any(classifications.get(t) == PunchClassification.LATE for t in ENTRY_SLOTS):
        return AttendanceStatus.LATE.value
    if any(classifications.get(t) == PunchClassification.EARLY_OUT for t in EXIT_SLOTS):
        return AttendanceStatus.EARLY_LEAVE.value
    return record.status or AttendanceStatus.PRESENT.value


@dataclass(frozen=True)
class DailySummary:
    employee_id: int
    work_date: date
    record: Optional[AttendanceRecord]
    shift: Optional[ResolvedShift]
    classifications: Mapping[LogType, PunchClassification]
    status: str

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "work_date": self.work_date.isoformat(),
            "shift": self.shift.to_dict() if self.shift else None,
            "punches": {
                t.field_name: {
                    "time": format_time(self.record.punch(t)) if self.record else None,
                    "classification": self.classifications[t].value,
                }
                for t in PUNCH_SEQUENCE
            },
            "minutes_late": self.record.minutes_late if self.record else 0,
            "minutes_early_leave": self.record.minutes_early_leave if self.record else 0,
            "status": self.status,
        }


def build_daily_summary(
    employee_id: int, work_date: date, record: Optional[AttendanceRecord], shift: Optional[ResolvedShift]
) -> DailySummary:
    classifications = classify_punches(record, shift)
    return DailySummary(
        employee_id=employee_id,
        work_date=work_date,
        record=record,
        shift=shift,
        classifications=classifications,
        status=summarize_day(record, classifications),
    )
