from __future__ import annotations

import logging
from datetime import date
from typing import Optional, TypeVar

from ..allotments.intervals import pick_active
from ..allotments.repository import AllotmentRepository
from ..common.datetime_utils import iso_weekday
from .model import SHIFT_TIME_FIELDS, ResolvedShift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resolve_field(override: Optional[T], base: T) -> T:
    """Per-field fallback: the override value when present, else the base."""
    return base if override is None else override


class ShiftResolver:
    """Find the effective shift for an employee on a date."""

    def __init__(self, allotments: AllotmentRepository, shifts: ShiftRepository):
        self._allotments = allotments
        self._shifts = shifts

    def resolve_shift(self, employee_id: int, work_date: date) -> Optional[ResolvedShift]:
        """Return the resolved shift, or ``None`` when nothing is scheduled that day."""

        weekday = iso_weekday(work_date)

        allotment = pick_active(self._allotments.allotments_covering_date(int(employee_id), work_date), work_date)
        if allotment is None:
            logger.debug("no allotment covers %s for employee %s", work_date, employee_id)
            return None

        day = self._shifts.shifts_for_weekday(allotment.shift_id, weekday)
        if day is None:
            logger.debug("shift %s is not scheduled on weekday %s", allotment.shift_id, weekday)
            return None

        base = day.definition
        override = day.override
        fields = {
            f: resolve_field(getattr(override, f) if override else None, getattr(base, f)) for f in SHIFT_TIME_FIELDS
        }
        grace = resolve_field(override.grace_period_minutes if override else None, base.grace_period_minutes)

        return ResolvedShift(
            shift_id=base.shift_id,
            shift_name=base.shift_name,
            work_date=work_date,
            weekday=weekday,
            grace_period_minutes=int(grace),
            has_override=override is not None,
            **fields,
        )
