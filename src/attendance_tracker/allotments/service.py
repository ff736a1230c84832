from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Union

from ..audit.sink import AuditEmitter
from ..common.datetime_utils import parse_iso_date
from ..core.enums import AuditAction, OverlapPolicy
from ..core.exceptions import (
    EmployeeNotFoundError,
    InvalidDateRangeError,
    MissingFieldError,
    ShiftNotFoundError,
    ValidationError,
)
from ..employees.repository import EmployeeRepository
from ..shifts.repository import ShiftRepository
from .intervals import plan_assignment
from .model import NewAllotment, ShiftAllotment
from .repository import AllotmentRepository

logger = logging.getLogger(__name__)

ALL_EMPLOYEES = "all"

EmployeeSelector = Union[Sequence[int], str]


class AllotmentService:
    def __init__(
        self,
        allotments: AllotmentRepository,
        shifts: ShiftRepository,
        employees: EmployeeRepository,
        *,
        audit: AuditEmitter | None = None,
        policy: OverlapPolicy = OverlapPolicy.TRUNCATE_PRIOR,
    ):
        self._allotments = allotments
        self._shifts = shifts
        self._employees = employees
        self._audit = audit or AuditEmitter()
        self._policy = OverlapPolicy(policy)

    def _select_employees(self, selector: EmployeeSelector) -> list[int]:
        if isinstance(selector, str):
            if selector.strip().lower() != ALL_EMPLOYEES:
                raise ValidationError("employees must be a list of ids or 'all'", field="employee_ids", value=selector)
            return [e.employee_id for e in self._employees.list_active()]

        ids: list[int] = []
        for raw in selector or ():
            try:
                employee_id = int(raw)
            except (TypeError, ValueError):
                raise EmployeeNotFoundError(raw) from None
            if not self._employees.get_by_id(employee_id):
                raise EmployeeNotFoundError(employee_id)
            if employee_id not in ids:
                ids.append(employee_id)
        if not ids:
            raise MissingFieldError("employee_ids")
        return ids

    def assign_shift(
        self,
        *,
        shift_id: int,
        employees: EmployeeSelector,
        effective_from: Any,
        effective_to: Any = None,
        actor: Optional[str] = None,
    ) -> int:
        """Assign ``shift_id`` to the selected employees; returns how many were assigned."""

        try:
            shift_id = int(shift_id)
        except (TypeError, ValueError):
            raise ShiftNotFoundError(shift_id) from None
        if not self._shifts.get_by_id(shift_id):
            raise ShiftNotFoundError(shift_id)

        if effective_from is None or (isinstance(effective_from, str) and not effective_from.strip()):
            raise InvalidDateRangeError("effective_from is required", field="effective_from")
        try:
            start = parse_iso_date(effective_from, field="effective_from")
            end = None if effective_to in (None, "") else parse_iso_date(effective_to, field="effective_to")
        except ValidationError as e:
            raise InvalidDateRangeError(e.message, field=e.field, value=e.value) from None
        if end is not None and end < start:
            raise InvalidDateRangeError(
                "effective_to must not be before effective_from", field="effective_to", value=effective_to
            )

        employee_ids = self._select_employees(employees)

        for employee_id in employee_ids:
            new = NewAllotment(employee_id=employee_id, shift_id=shift_id, effective_from=start, effective_to=end)
            plan = plan_assignment(self._allotments.list_for_employee(employee_id), new, policy=self._policy)
            allotment_id = self._allotments.apply_plan(plan)
            logger.info(
                "assigned shift %s to employee %s from %s to %s (%d removed, %d adjusted)",
                shift_id,
                employee_id,
                start,
                end or "open",
                len(plan.deletions),
                len(plan.updates),
            )
            self._audit.emit(
                actor=actor,
                action=AuditAction.CREATE,
                table_name="employee_shift_allotments",
                record_id=allotment_id,
                before={"removed": list(plan.deletions), "adjusted": [a.to_dict() for a in plan.updates]}
                if plan.deletions or plan.updates
                else None,
                after=ShiftAllotment(
                    allotment_id=allotment_id,
                    employee_id=employee_id,
                    shift_id=shift_id,
                    effective_from=start,
                    effective_to=end,
                ).to_dict(),
            )

        return len(employee_ids)

    def list_for_employee(self, employee_id: int) -> list[ShiftAllotment]:
        if not self._employees.get_by_id(int(employee_id)):
            raise EmployeeNotFoundError(employee_id)
        return list(self._allotments.list_for_employee(int(employee_id)))
