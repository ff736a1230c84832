from __future__ import annotations

from datetime import time

from ...core.enums import AttendanceStatus, LogType
from ...shifts.model import ResolvedShift
from .base import PunchDecision, PunchStrategy, whole_minutes_before


class AfternoonOutStrategy(PunchStrategy):
    """Day exit: any minute before the required time is an early leave (no grace)."""

    def evaluate(self, *, punch_time: time, shift: ResolvedShift) -> PunchDecision:
        required = shift.required_time(LogType.AFTERNOON_OUT)
        early = max(0, whole_minutes_before(punch_time, required))
        return PunchDecision(
            minutes_early=early,
            status=AttendanceStatus.EARLY_LEAVE if early > 0 else AttendanceStatus.ON_TIME,
        )
