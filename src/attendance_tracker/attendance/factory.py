from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import LogType
from .strategies.afternoon_out_strategy import AfternoonOutStrategy
from .strategies.base import PunchStrategy
from .strategies.morning_in_strategy import MorningInStrategy
from .strategies.record_only_strategy import RecordOnlyStrategy


@dataclass
class PunchStrategyFactory:
    """Factory Pattern: choose the strategy for a punch slot."""

    def for_log_type(self, log_type: LogType) -> PunchStrategy:
        if log_type == LogType.MORNING_IN:
            return MorningInStrategy()
        if log_type == LogType.AFTERNOON_OUT:
            return AfternoonOutStrategy()
        return RecordOnlyStrategy()
