from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    ``field`` and ``value`` carry enough detail for a caller to render a
    precise message (which input was wrong and what it contained).
    """

    kind = "domain_error"

    def __init__(self, message: str, *, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value

    def to_dict(self) -> dict:
        return {
            "error": self.kind,
            "message": self.message,
            "field": self.field,
            "value": None if self.value is None else str(self.value),
        }


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "validation_error"


class MissingFieldError(ValidationError):
    kind = "missing_field"

    def __init__(self, field: str):
        super().__init__(f"{field} is required", field=field)


class InvalidTimeFormatError(ValidationError):
    kind = "invalid_time_format"

    def __init__(self, field: str, value: Any):
        super().__init__(f"{field} is not a valid time of day: {value!r}", field=field, value=value)


class InvalidPatternError(ValidationError):
    kind = "invalid_pattern"

    def __init__(self, index: int, reason: str):
        super().__init__(f"pattern #{index}: {reason}", field=f"patterns[{index}]")
        self.index = index
        self.reason = reason


class InvalidDateRangeError(ValidationError):
    kind = "invalid_date_range"


class InvalidLogTypeError(ValidationError):
    kind = "invalid_log_type"

    def __init__(self, value: Any):
        super().__init__(f"unknown log type: {value!r}", field="log_type", value=value)


class NotFoundError(DomainError):
    """Raised when a referenced id does not exist."""

    kind = "not_found"


class ShiftNotFoundError(NotFoundError):
    kind = "shift_not_found"

    def __init__(self, shift_id: Any):
        super().__init__(f"shift {shift_id} does not exist", field="shift_id", value=shift_id)


class EmployeeNotFoundError(NotFoundError):
    kind = "employee_not_found"

    def __init__(self, value: Any, *, field: str = "employee_id"):
        super().__init__(f"employee {value} does not exist", field=field, value=value)


class ConflictError(DomainError):
    kind = "conflict"


class AttendanceAlreadyCompleteError(ConflictError):
    kind = "attendance_already_complete"

    def __init__(self, employee_id: Any, work_date: Any):
        super().__init__(
            f"all punches for employee {employee_id} on {work_date} are already recorded",
            field="work_date",
            value=work_date,
        )


class ConcurrentUpdateError(ConflictError):
    kind = "concurrent_update"


class StateError(DomainError):
    """A legitimate business condition that blocks the operation."""

    kind = "state_error"


class NoShiftAssignedError(StateError):
    kind = "no_shift_assigned"

    def __init__(self, employee_id: Any, work_date: Any):
        super().__init__(
            f"employee {employee_id} has no shift scheduled on {work_date}",
            field="work_date",
            value=work_date,
        )


class StorageUnavailableError(Exception):
    """Raised when the relational store cannot be reached. Safe to retry."""

    kind = "storage_unavailable"
