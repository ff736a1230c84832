from __future__ import annotations

from datetime import time

from ...shifts.model import ResolvedShift
from .base import PunchDecision, PunchStrategy


class RecordOnlyStrategy(PunchStrategy):
    """Lunch-break punches: stored, never scored."""

    def evaluate(self, *, punch_time: time, shift: ResolvedShift) -> PunchDecision:
        return PunchDecision()
