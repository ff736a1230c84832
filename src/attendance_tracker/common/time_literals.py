"""Normalisation of time-of-day inputs into canonical ``HH:MM:SS`` literals.

Punch and shift times arrive in several shapes: clock objects from the kiosk,
``<input type=time>`` strings from the browser, 12-hour strings and ISO
datetimes. ISO fragments are read literally, never converted between time
zones, so the wall-clock value the user typed is the value stored.
"""

from __future__ import annotations

import re
from datetime import datetime, time, timedelta
from typing import Any, Optional

_FRACTION = r"(?:[.,]\d+)?"
_ISO_FRAGMENT = re.compile(r"T\s*(\d{1,2}):(\d{2})(?::(\d{2})" + _FRACTION + r")?")
_TWELVE_HOUR = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2})" + _FRACTION + r")?\s*([AaPp][Mm])$")
_TWENTY_FOUR_HOUR = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2})" + _FRACTION + r")?$")


def _canonical(hour: int, minute: int, second: int) -> Optional[str]:
    if not (0 <= hour <= 23 and 0 <= minute <= 59 and 0 <= second <= 59):
        return None
    return f"{hour:02d}:{minute:02d}:{second:02d}"


def _from_clock(value: Any) -> Optional[str]:
    if isinstance(value, timedelta):
        # MySQL TIME columns come back as timedelta from mysql-connector.
        total = int(value.total_seconds())
        if total < 0 or total >= 86400:
            return None
        return _canonical(total // 3600, (total % 3600) // 60, total % 60)
    return _canonical(value.hour, value.minute, value.second)


def parse_time_string(value: Any) -> Optional[str]:
    """Return ``value`` as a zero-padded ``HH:MM:SS`` string, or ``None``.

    Accepted, in priority order: a clock object (``time``, ``datetime``,
    ``timedelta``), a string with an ISO ``THH:MM[:SS]`` fragment, a 12-hour
    ``H:MM[:SS] AM|PM`` string and a 24-hour ``H:MM[:SS]`` string. Anything
    else, or any out-of-range field, yields ``None``.
    """

    if isinstance(value, (time, datetime, timedelta)):
        return _from_clock(value)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    m = _ISO_FRAGMENT.search(text)
    if m:
        return _canonical(int(m.group(1)), int(m.group(2)), int(m.group(3) or 0))

    m = _TWELVE_HOUR.match(text)
    if m:
        hour = int(m.group(1))
        if not 1 <= hour <= 12:
            return None
        meridiem = m.group(4).upper()
        if meridiem == "AM":
            hour = 0 if hour == 12 else hour
        else:
            hour = 12 if hour == 12 else hour + 12
        return _canonical(hour, int(m.group(2)), int(m.group(3) or 0))

    m = _TWENTY_FOUR_HOUR.match(text)
    if m:
        return _canonical(int(m.group(1)), int(m.group(2)), int(m.group(3) or 0))

    return None


def parse_time(value: Any) -> Optional[time]:
    canonical = parse_time_string(value)
    if canonical is None:
        return None
    hour, minute, second = (int(p) for p in canonical.split(":"))
    return time(hour, minute, second)


def format_time(value: Optional[time]) -> Optional[str]:
    if value is None:
        return None
    return f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"


def seconds_of_day(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second
