from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AssignmentPlan, ShiftAllotment


class AllotmentRepository(Protocol):
    def list_for_employee(self, employee_id: int) -> Sequence[ShiftAllotment]:
        """All allotments of one employee ordered by ``effective_from``."""

        raise NotImplementedError

    def allotments_covering_date(self, employee_id: int, work_date: date) -> Sequence[ShiftAllotment]:
        raise NotImplementedError

    def apply_plan(self, plan: AssignmentPlan) -> int:
        """Apply deletions, updates and inserts in one transaction.

        Returns the id of the last inserted allotment (the assigned one).
        """

        raise NotImplementedError
