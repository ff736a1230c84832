from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..audit.sink import AuditEmitter
from ..common.time_literals import format_time, parse_time
from ..common.validators import normalize_weekdays, require_non_empty
from ..core.constants import DEFAULT_GRACE_PERIOD_MINUTES
from ..core.enums import AuditAction
from ..core.exceptions import (
    InvalidPatternError,
    InvalidTimeFormatError,
    MissingFieldError,
    ShiftNotFoundError,
    ValidationError,
)
from .model import (
    SHIFT_TIME_FIELDS,
    NewShift,
    PatternDetail,
    Shift,
    ShiftDayOverride,
    ShiftListing,
    ShiftPattern,
)
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


def _parse_grace(value: Any, *, field: str) -> int:
    minutes = None
    if isinstance(value, int) and not isinstance(value, bool):
        minutes = value
    elif isinstance(value, float) and value.is_integer():
        minutes = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        minutes = int(value.strip())

    if minutes is None or minutes < 0:
        raise ValidationError(f"{field} must be a whole number of minutes", field=field, value=value)
    return minutes


def _shift_to_dict(shift: NewShift, shift_id: int) -> dict:
    out = {
        "shift_id": shift_id,
        "shift_name": shift.shift_name,
        "grace_period_minutes": shift.grace_period_minutes,
        "weekdays": list(shift.weekdays),
        "overrides": len(shift.overrides),
    }
    for f in SHIFT_TIME_FIELDS:
        out[f] = format_time(getattr(shift, f))
    return out


class ShiftService:
    def __init__(
        self,
        shifts: ShiftRepository,
        *,
        audit: AuditEmitter | None = None,
        default_grace_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES,
    ):
        self._shifts = shifts
        self._audit = audit or AuditEmitter()
        self._default_grace = int(default_grace_minutes)

    def validate_patterns(self, patterns: Sequence[Mapping[str, Any]] | None) -> list[ShiftPattern]:
        if patterns is not None and not isinstance(patterns, (list, tuple)):
            raise ValidationError("patterns must be a list", field="patterns", value=patterns)

        out: list[ShiftPattern] = []
        for index, raw in enumerate(patterns or ()):
            if not isinstance(raw, Mapping):
                raise InvalidPatternError(index, "pattern must be an object")
            weekdays = normalize_weekdays(raw.get("weekdays") or raw.get("days"))
            if not weekdays:
                raise InvalidPatternError(index, "at least one valid weekday is required")

            times = {}
            for f in SHIFT_TIME_FIELDS:
                value = raw.get(f)
                if value is None or (isinstance(value, str) and not value.strip()):
                    raise InvalidPatternError(index, f"{f} is required")
                parsed = parse_time(value)
                if parsed is None:
                    raise InvalidPatternError(index, f"{f} is not a valid time of day: {value!r}")
                times[f] = parsed

            grace = raw.get("grace_period_minutes")
            if grace is not None:
                try:
                    grace = _parse_grace(grace, field="grace_period_minutes")
                except ValidationError as e:
                    raise InvalidPatternError(index, e.message) from None

            out.append(ShiftPattern(weekdays=tuple(weekdays), grace_period_minutes=grace, **times))
        return out

    def create_shift(
        self,
        *,
        name: Optional[str],
        base_times: Mapping[str, Any],
        grace_period: Any = None,
        weekdays: Sequence[Any] | None = None,
        patterns: Sequence[Mapping[str, Any]] | None = None,
        actor: Optional[str] = None,
    ) -> int:
        name = require_non_empty(name, "shift_name")

        times = {}
        for f in SHIFT_TIME_FIELDS:
            value = base_times.get(f)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise MissingFieldError(f)
            parsed = parse_time(value)
            if parsed is None:
                raise InvalidTimeFormatError(f, value)
            times[f] = parsed

        grace = self._default_grace if grace_period is None else _parse_grace(grace_period, field="grace_period_minutes")
        validated = self.validate_patterns(patterns)

        # Later patterns replace earlier ones for the same weekday.
        overrides: dict[int, ShiftDayOverride] = {}
        for p in validated:
            for day in p.weekdays:
                overrides[day] = ShiftDayOverride(
                    shift_id=0,
                    weekday=day,
                    morning_in=p.morning_in,
                    morning_out=p.morning_out,
                    afternoon_in=p.afternoon_in,
                    afternoon_out=p.afternoon_out,
                    grace_period_minutes=p.grace_period_minutes,
                )

        days = set(normalize_weekdays(weekdays)) | set(overrides)
        new_shift = NewShift(
            shift_name=name,
            grace_period_minutes=grace,
            weekdays=tuple(sorted(days)),
            overrides=tuple(overrides[d] for d in sorted(overrides)),
            **times,
        )

        shift_id = self._shifts.create(new_shift)
        logger.info("created shift %s (%r) on weekdays %s with %d overrides", shift_id, name, new_shift.weekdays, len(overrides))

        self._audit.emit(
            actor=actor,
            action=AuditAction.CREATE,
            table_name="shifts",
            record_id=shift_id,
            after=_shift_to_dict(new_shift, shift_id),
        )
        return shift_id

    def get_shift(self, shift_id: int) -> Shift:
        shift = self._shifts.get_shift(int(shift_id))
        if not shift:
            raise ShiftNotFoundError(shift_id)
        return shift

    def list_shifts(self) -> list[ShiftListing]:
        return [self._to_listing(s) for s in self._shifts.list_all()]

    def delete_shift(self, shift_id: int, *, actor: Optional[str] = None) -> None:
        shift = self._shifts.get_shift(int(shift_id))
        if not shift:
            raise ShiftNotFoundError(shift_id)

        if not self._shifts.delete(int(shift_id)):
            raise ShiftNotFoundError(shift_id)
        logger.info("deleted shift %s and its allotments", shift_id)

        self._audit.emit(
            actor=actor,
            action=AuditAction.DELETE,
            table_name="shifts",
            record_id=shift_id,
            before=self._to_listing(shift).to_dict(),
            after=None,
        )

    @staticmethod
    def _to_listing(shift: Shift) -> ShiftListing:
        groups: dict[tuple, list[int]] = {}
        for day in sorted(shift.overrides):
            groups.setdefault(shift.overrides[day].signature(), []).append(day)

        patterns = [
            PatternDetail(
                weekdays=tuple(days),
                morning_in=sig[0],
                morning_out=sig[1],
                afternoon_in=sig[2],
                afternoon_out=sig[3],
                grace_period_minutes=sig[4],
            )
            for sig, days in groups.items()
        ]
        patterns.sort(key=lambda p: p.weekdays[0])
        return ShiftListing(
            definition=shift.definition,
            weekdays=tuple(sorted(shift.weekdays)),
            patterns=tuple(patterns),
        )
