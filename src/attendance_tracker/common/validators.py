from __future__ import annotations

from typing import Any, Iterable

from ..core.exceptions import MissingFieldError

_DAY_NAMES = {
    "monday": 1,
    "tuesday": 2,
    "wednesday": 3,
    "thursday": 4,
    "friday": 5,
    "saturday": 6,
    "sunday": 7,
}
_DAY_ABBREVIATIONS = {name[:3]: num for name, num in _DAY_NAMES.items()}


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise MissingFieldError(field_name)
    return str(value).strip()


def normalize_weekday(value: Any) -> int | None:
    """Map 1-7, 0 (Sunday) or an English day name to Monday=1..Sunday=7."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        if value == 0:
            return 7
        return value if 1 <= value <= 7 else None
    if isinstance(value, str):
        token = value.strip().lower()
        if token.isdigit():
            return normalize_weekday(int(token))
        return _DAY_NAMES.get(token) or _DAY_ABBREVIATIONS.get(token)
    return None


def normalize_weekdays(values: Iterable[Any] | None) -> list[int]:
    """Normalise, de-duplicate and sort weekday tokens; unknown ones are dropped."""

    if isinstance(values, (str, int)):
        values = [values]

    out: set[int] = set()
    for v in values or ():
        day = normalize_weekday(v)
        if day is not None:
            out.add(day)
    return sorted(out)
