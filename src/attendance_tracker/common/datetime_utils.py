from __future__ import annotations

from datetime import date, datetime

from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value, *, field: str = "date") -> date:
    """Parse YYYY-MM-DD string (or pass a date through)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a YYYY-MM-DD date", field=field, value=value) from None


def iso_weekday(value: date) -> int:
    """Monday=1 .. Sunday=7."""
    return value.isoweekday()


def now_local() -> datetime:
    """Current local time.

    Note: Only the HTTP edge calls this; services take ``now`` explicitly.
    """
    return datetime.now()
