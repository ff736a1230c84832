from __future__ import annotations

from typing import Optional, Sequence

from ..common.time_literals import parse_time
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, placeholders
from .model import NewShift, Shift, ShiftDay, ShiftDayOverride, ShiftDefinition
from .repository import ShiftRepository

_SHIFT_COLUMNS = "shift_id, shift_name, morning_in, morning_out, afternoon_in, afternoon_out, grace_period_minutes"
_OVERRIDE_COLUMNS = "shift_id, weekday, morning_in, morning_out, afternoon_in, afternoon_out, grace_period_minutes"


def _to_definition(r: dict) -> ShiftDefinition:
    return ShiftDefinition(
        shift_id=int(r["shift_id"]),
        shift_name=r["shift_name"],
        morning_in=parse_time(r["morning_in"]),
        morning_out=parse_time(r["morning_out"]),
        afternoon_in=parse_time(r["afternoon_in"]),
        afternoon_out=parse_time(r["afternoon_out"]),
        grace_period_minutes=int(r["grace_period_minutes"]),
    )


def _to_override(r: dict) -> ShiftDayOverride:
    grace = r.get("grace_period_minutes")
    return ShiftDayOverride(
        shift_id=int(r["shift_id"]),
        weekday=int(r["weekday"]),
        morning_in=parse_time(r.get("morning_in")),
        morning_out=parse_time(r.get("morning_out")),
        afternoon_in=parse_time(r.get("afternoon_in")),
        afternoon_out=parse_time(r.get("afternoon_out")),
        grace_period_minutes=int(grace) if grace is not None else None,
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, shift: NewShift) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(shift_name, morning_in, morning_out, afternoon_in, afternoon_out, grace_period_minutes)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    shift.shift_name,
                    shift.morning_in,
                    shift.morning_out,
                    shift.afternoon_in,
                    shift.afternoon_out,
                    int(shift.grace_period_minutes),
                ),
            )
            shift_id = int(cur.lastrowid)

            for weekday in shift.weekdays:
                cur.execute(
                    "INSERT IGNORE INTO shift_days(shift_id, weekday) VALUES(%s,%s)",
                    (shift_id, int(weekday)),
                )

            for o in shift.overrides:
                cur.execute(
                    """
                    INSERT INTO shift_day_overrides(
                        shift_id, weekday, morning_in, morning_out, afternoon_in, afternoon_out, grace_period_minutes
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    ON DUPLICATE KEY UPDATE
                        morning_in=VALUES(morning_in),
                        morning_out=VALUES(morning_out),
                        afternoon_in=VALUES(afternoon_in),
                        afternoon_out=VALUES(afternoon_out),
                        grace_period_minutes=VALUES(grace_period_minutes)
                    """,
                    (
                        shift_id,
                        int(o.weekday),
                        o.morning_in,
                        o.morning_out,
                        o.afternoon_in,
                        o.afternoon_out,
                        o.grace_period_minutes,
                    ),
                )
            return shift_id

    def get_by_id(self, shift_id: int) -> Optional[ShiftDefinition]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SHIFT_COLUMNS} FROM shifts WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _to_definition(r) if r else None

    def get_shift(self, shift_id: int) -> Optional[Shift]:
        shifts = self._load(where="WHERE shift_id=%s", params=(int(shift_id),))
        return shifts[0] if shifts else None

    def list_all(self) -> Sequence[Shift]:
        return self._load()

    def _load(self, *, where: str = "", params: tuple = ()) -> list[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SHIFT_COLUMNS} FROM shifts {where} ORDER BY shift_id", params)
            definitions = [_to_definition(r) for r in fetchall(cur)]
            if not definitions:
                return []

            ids = tuple(d.shift_id for d in definitions)
            cur.execute(
                f"SELECT shift_id, weekday FROM shift_days WHERE shift_id IN ({placeholders(len(ids))})",
                ids,
            )
            weekdays: dict[int, set[int]] = {}
            for r in fetchall(cur):
                weekdays.setdefault(int(r["shift_id"]), set()).add(int(r["weekday"]))

            cur.execute(
                f"SELECT {_OVERRIDE_COLUMNS} FROM shift_day_overrides WHERE shift_id IN ({placeholders(len(ids))})",
                ids,
            )
            overrides: dict[int, dict[int, ShiftDayOverride]] = {}
            for r in fetchall(cur):
                o = _to_override(r)
                overrides.setdefault(o.shift_id, {})[o.weekday] = o

        return [
            Shift(
                definition=d,
                weekdays=frozenset(weekdays.get(d.shift_id, ())),
                overrides=overrides.get(d.shift_id, {}),
            )
            for d in definitions
        ]

    def shifts_for_weekday(self, shift_id: int, weekday: int) -> Optional[ShiftDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {", ".join("s." + c.strip() for c in _SHIFT_COLUMNS.split(","))}
                FROM shifts s
                JOIN shift_days sd ON sd.shift_id = s.shift_id
                WHERE s.shift_id=%s AND sd.weekday=%s
                """,
                (int(shift_id), int(weekday)),
            )
            r = fetchone(cur)
            if not r:
                return None
            definition = _to_definition(r)

            cur.execute(
                f"SELECT {_OVERRIDE_COLUMNS} FROM shift_day_overrides WHERE shift_id=%s AND weekday=%s",
                (int(shift_id), int(weekday)),
            )
            o = fetchone(cur)
            return ShiftDay(definition=definition, weekday=int(weekday), override=_to_override(o) if o else None)

    def delete(self, shift_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employee_shift_allotments WHERE shift_id=%s", (int(shift_id),))
            cur.execute("DELETE FROM shift_day_overrides WHERE shift_id=%s", (int(shift_id),))
            cur.execute("DELETE FROM shift_days WHERE shift_id=%s", (int(shift_id),))
            cur.execute("DELETE FROM shifts WHERE shift_id=%s", (int(shift_id),))
            return cur.rowcount > 0
