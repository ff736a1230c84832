from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import time
from typing import Optional

from ...common.time_literals import seconds_of_day
from ...core.enums import AttendanceStatus
from ...shifts.model import ResolvedShift


@dataclass(frozen=True)
class PunchDecision:
    minutes_late: int = 0
    minutes_early: int = 0
    status: Optional[AttendanceStatus] = None


def whole_minutes_after(actual: time, required: time) -> int:
    """Whole minutes ``actual`` is past ``required`` (negative when before)."""
    return (seconds_of_day(actual) - seconds_of_day(required)) // 60


def whole_minutes_before(actual: time, required: time) -> int:
    """Whole minutes ``actual`` is ahead of ``required`` (negative when after)."""
    return (seconds_of_day(required) - seconds_of_day(actual)) // 60


class PunchStrategy(ABC):
    """Strategy Pattern: how one punch slot affects lateness and status.

    A decision with ``status=None`` records the punch without touching status.
    """

    @abstractmethod
    def evaluate(self, *, punch_time: time, shift: ResolvedShift) -> PunchDecision:
        raise NotImplementedError
