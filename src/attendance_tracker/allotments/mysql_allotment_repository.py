from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AssignmentPlan, ShiftAllotment
from .repository import AllotmentRepository

_COLUMNS = "allotment_id, employee_id, shift_id, effective_from, effective_to"


def _to_allotment(r: dict) -> ShiftAllotment:
    return ShiftAllotment(
        allotment_id=int(r["allotment_id"]),
        employee_id=int(r["employee_id"]),
        shift_id=int(r["shift_id"]),
        effective_from=r["effective_from"],
        effective_to=r.get("effective_to"),
    )


class MySQLAllotmentRepository(AllotmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee(self, employee_id: int) -> Sequence[ShiftAllotment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employee_shift_allotments
                WHERE employee_id=%s
                ORDER BY effective_from, allotment_id
                """,
                (int(employee_id),),
            )
            return [_to_allotment(r) for r in fetchall(cur)]

    def allotments_covering_date(self, employee_id: int, work_date: date) -> Sequence[ShiftAllotment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employee_shift_allotments
                WHERE employee_id=%s
                  AND effective_from <= %s
                  AND (effective_to IS NULL OR effective_to >= %s)
                ORDER BY effective_from DESC, allotment_id DESC
                """,
                (int(employee_id), work_date, work_date),
            )
            return [_to_allotment(r) for r in fetchall(cur)]

    def apply_plan(self, plan: AssignmentPlan) -> int:
        new_id = 0
        with db_cursor(self._conn_factory) as (_, cur):
            for allotment_id in plan.deletions:
                cur.execute("DELETE FROM employee_shift_allotments WHERE allotment_id=%s", (int(allotment_id),))

            for a in plan.updates:
                cur.execute(
                    """
                    UPDATE employee_shift_allotments
                    SET effective_from=%s, effective_to=%s
                    WHERE allotment_id=%s
                    """,
                    (a.effective_from, a.effective_to, int(a.allotment_id)),
                )

            for n in plan.inserts:
                cur.execute(
                    """
                    INSERT INTO employee_shift_allotments(employee_id, shift_id, effective_from, effective_to)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(n.employee_id), int(n.shift_id), n.effective_from, n.effective_to),
                )
                new_id = int(cur.lastrowid)
        return new_id
