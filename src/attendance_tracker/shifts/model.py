from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Mapping, Optional

from ..common.time_literals import format_time
from ..core.constants import DEFAULT_GRACE_PERIOD_MINUTES
from ..core.enums import LogType

SHIFT_TIME_FIELDS = ("morning_in", "morning_out", "afternoon_in", "afternoon_out")


@dataclass(frozen=True)
class ShiftDefinition:
    """Domain entity: a named shift template with four base clock times."""

    shift_id: int
    shift_name: str
    morning_in: time
    morning_out: time
    afternoon_in: time
    afternoon_out: time
    grace_period_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES


@dataclass(frozen=True)
class ShiftDayOverride:
    """Per-(shift, weekday) replacement of any base time and/or the grace period.

    ``None`` fields fall back to the shift's base value.
    """

    shift_id: int
    weekday: int
    morning_in: Optional[time] = None
    morning_out: Optional[time] = None
    afternoon_in: Optional[time] = None
    afternoon_out: Optional[time] = None
    grace_period_minutes: Optional[int] = None

    def signature(self) -> tuple:
        return tuple(getattr(self, f) for f in SHIFT_TIME_FIELDS) + (self.grace_period_minutes,)


@dataclass(frozen=True)
class ShiftDay:
    """What the store knows about one shift on one weekday it is associated with."""

    definition: ShiftDefinition
    weekday: int
    override: Optional[ShiftDayOverride] = None


@dataclass(frozen=True)
class Shift:
    """Aggregate: definition + weekday associations + overrides keyed by weekday."""

    definition: ShiftDefinition
    weekdays: frozenset[int] = frozenset()
    overrides: Mapping[int, ShiftDayOverride] = field(default_factory=dict)

    @property
    def shift_id(self) -> int:
        return self.definition.shift_id


@dataclass(frozen=True)
class ShiftPattern:
    """Validated input for one per-day override group."""

    weekdays: tuple[int, ...]
    morning_in: time
    morning_out: time
    afternoon_in: time
    afternoon_out: time
    grace_period_minutes: Optional[int] = None


@dataclass(frozen=True)
class NewShift:
    """Validated input handed to the repository for atomic creation."""

    shift_name: str
    morning_in: time
    morning_out: time
    afternoon_in: time
    afternoon_out: time
    grace_period_minutes: int
    weekdays: tuple[int, ...]
    overrides: tuple[ShiftDayOverride, ...] = ()


@dataclass(frozen=True)
class PatternDetail:
    """Display group: overrides sharing identical times and grace."""

    weekdays: tuple[int, ...]
    morning_in: Optional[time]
    morning_out: Optional[time]
    afternoon_in: Optional[time]
    afternoon_out: Optional[time]
    grace_period_minutes: Optional[int]

    def to_dict(self) -> dict:
        out = {"weekdays": list(self.weekdays), "grace_period_minutes": self.grace_period_minutes}
        for f in SHIFT_TIME_FIELDS:
            out[f] = format_time(getattr(self, f))
        return out


@dataclass(frozen=True)
class ShiftListing:
    definition: ShiftDefinition
    weekdays: tuple[int, ...]
    patterns: tuple[PatternDetail, ...]

    def to_dict(self) -> dict:
        d = self.definition
        out = {
            "shift_id": d.shift_id,
            "shift_name": d.shift_name,
            "grace_period_minutes": d.grace_period_minutes,
            "weekdays": list(self.weekdays),
            "patterns": [p.to_dict() for p in self.patterns],
        }
        for f in SHIFT_TIME_FIELDS:
            out[f] = format_time(getattr(d, f))
        return out


@dataclass(frozen=True)
class ResolvedShift:
    """The effective time window for one employee on one date."""

    shift_id: int
    shift_name: str
    work_date: date
    weekday: int
    morning_in: time
    morning_out: time
    afternoon_in: time
    afternoon_out: time
    grace_period_minutes: int
    has_override: bool = False

    def required_time(self, log_type: LogType) -> time:
        return getattr(self, log_type.field_name)

    def to_dict(self) -> dict:
        out = {
            "shift_id": self.shift_id,
            "shift_name": self.shift_name,
            "work_date": self.work_date.isoformat(),
            "weekday": self.weekday,
            "grace_period_minutes": self.grace_period_minutes,
            "has_override": self.has_override,
        }
        for f in SHIFT_TIME_FIELDS:
            out[f] = format_time(getattr(self, f))
        return out
