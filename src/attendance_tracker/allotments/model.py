from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class ShiftAllotment:
    """Domain entity: binds one employee to one shift over ``[effective_from, effective_to]``.

    ``effective_to`` of ``None`` means open-ended.
    """

    allotment_id: int
    employee_id: int
    shift_id: int
    effective_from: date
    effective_to: Optional[date] = None

    def covers(self, day: date) -> bool:
        if day < self.effective_from:
            return False
        return self.effective_to is None or day <= self.effective_to

    def to_dict(self) -> dict:
        return {
            "allotment_id": self.allotment_id,
            "employee_id": self.employee_id,
            "shift_id": self.shift_id,
            "effective_from": self.effective_from.isoformat(),
            "effective_to": self.effective_to.isoformat() if self.effective_to else None,
        }


@dataclass(frozen=True)
class NewAllotment:
    employee_id: int
    shift_id: int
    effective_from: date
    effective_to: Optional[date] = None


@dataclass(frozen=True)
class AssignmentPlan:
    """Row changes needed to insert one allotment without overlaps.

    ``updates`` holds existing allotments with their new bounds.
    ``inserts`` always ends with the allotment being assigned.
    """

    deletions: tuple[int, ...] = ()
    updates: tuple[ShiftAllotment, ...] = ()
    inserts: tuple[NewAllotment, ...] = ()
