from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..common.time_literals import parse_time
from ..core.enums import LogType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = (
    "attendance_id, employee_id, work_date, morning_in, morning_out, afternoon_in, afternoon_out, "
    "minutes_late, minutes_early_leave, status, version"
)

# Column names are interpolated into SQL; only these are allowed.
_PUNCH_COLUMNS = {t: t.field_name for t in LogType}


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        morning_in=parse_time(r.get("morning_in")),
        morning_out=parse_time(r.get("morning_out")),
        afternoon_in=parse_time(r.get("afternoon_in")),
        afternoon_out=parse_time(r.get("afternoon_out")),
        minutes_late=int(r.get("minutes_late") or 0),
        minutes_early_leave=int(r.get("minutes_early_leave") or 0),
        status=r["status"],
        version=int(r.get("version") or 0),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def ensure_record(self, employee_id: int, work_date: date) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            # The (employee_id, work_date) unique key makes concurrent creation a no-op.
            cur.execute(
                "INSERT IGNORE INTO attendance_records(employee_id, work_date) VALUES(%s,%s)",
                (int(employee_id), work_date),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            return _to_record(fetchone(cur))

    def update_punch(
        self,
        *,
        attendance_id: int,
        expected_version: int,
        log_type: LogType,
        punch_time: time,
        minutes_late: int,
        minutes_early_leave: int,
        status: str,
    ) -> bool:
        column = _PUNCH_COLUMNS[LogType(log_type)]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE attendance_records
                SET {column}=%s, minutes_late=%s, minutes_early_leave=%s, status=%s, version=version+1
                WHERE attendance_id=%s AND version=%s
                """,
                (punch_time, int(minutes_late), int(minutes_early_leave), status, int(attendance_id), int(expected_version)),
            )
            return cur.rowcount > 0

    def list_for_employee(self, employee_id: int, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date
                """,
                (int(employee_id), start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]
