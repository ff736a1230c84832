from __future__ import annotations

from datetime import time

from ...core.enums import AttendanceStatus, LogType
from ...shifts.model import ResolvedShift
from .base import PunchDecision, PunchStrategy, whole_minutes_after


class MorningInStrategy(PunchStrategy):
    """Day entry: minutes past the required time beyond the grace period count as late."""

    def evaluate(self, *, punch_time: time, shift: ResolvedShift) -> PunchDecision:
        required = shift.required_time(LogType.MORNING_IN)
        late = max(0, whole_minutes_after(punch_time, required) - shift.grace_period_minutes)
        return PunchDecision(
            minutes_late=late,
            status=AttendanceStatus.LATE if late > 0 else AttendanceStatus.ON_TIME,
        )
