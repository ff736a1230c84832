from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EmploymentStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee.

    Note: a plain data object (no DB access code). ``employee_code`` is the
    badge/kiosk code punch events are keyed by.
    """

    employee_id: int
    employee_code: str
    first_name: str
    last_name: str
    middle_name: Optional[str] = None
    status: EmploymentStatus = EmploymentStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == EmploymentStatus.ACTIVE
