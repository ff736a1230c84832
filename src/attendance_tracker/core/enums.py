from __future__ import annotations

from enum import Enum


class EmploymentStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    TERMINATED = "TERMINATED"


class LogType(str, Enum):
    """The four daily punch slots, in the order they must be captured."""

    MORNING_IN = "MORNING_IN"
    MORNING_OUT = "MORNING_OUT"
    AFTERNOON_IN = "AFTERNOON_IN"
    AFTERNOON_OUT = "AFTERNOON_OUT"

    @property
    def field_name(self) -> str:
        return self.value.lower()


PUNCH_SEQUENCE = (
    LogType.MORNING_IN,
    LogType.MORNING_OUT,
    LogType.AFTERNOON_IN,
    LogType.AFTERNOON_OUT,
)
ENTRY_SLOTS = (LogType.MORNING_IN, LogType.AFTERNOON_IN)
EXIT_SLOTS = (LogType.MORNING_OUT, LogType.AFTERNOON_OUT)


class AttendanceStatus(str, Enum):
    """Status label stored on an attendance record."""

    ON_TIME = "On-Time"
    LATE = "Late"
    EARLY_LEAVE = "Early Leave"
    PRESENT = "Present"
    ABSENT = "Absent"


class PunchClassification(str, Enum):
    """Per-slot label shown in the daily summary."""

    ABSENT = "Absent"
    MISSING = "Missing"
    EARLY_IN = "Early-In"
    EARLY_OUT = "Early-Out"
    LATE = "Late"
    LATE_OUT = "Late-Out"
    ON_TIME = "On-Time"
    NO_SHIFT = "No Shift"


class OverlapPolicy(str, Enum):
    """How a new allotment reconciles with existing ones for the same employee.

    TRUNCATE_PRIOR only shortens allotments that start before the new one;
    allotments starting later are left alone. CARVE removes the new range
    from every existing allotment.
    """

    TRUNCATE_PRIOR = "truncate_prior"
    CARVE = "carve"


class StatusPolicy(str, Enum):
    """LATEST overwrites the record status with the most recent punch result.
    WORST keeps the most severe status seen during the day."""

    LATEST = "latest"
    WORST = "worst"


class AuditAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    PUNCH = "PUNCH"
    SCAN = "SCAN"
