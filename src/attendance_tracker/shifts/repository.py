from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewShift, Shift, ShiftDay, ShiftDefinition


class ShiftRepository(Protocol):
    def create(self, shift: NewShift) -> int:
        """Persist definition, weekday rows and overrides in one transaction.

        Overrides upsert by (shift, weekday). Returns shift_id.
        """

        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[ShiftDefinition]:
        raise NotImplementedError

    def get_shift(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Shift]:
        raise NotImplementedError

    def shifts_for_weekday(self, shift_id: int, weekday: int) -> Optional[ShiftDay]:
        """Return the shift as it applies on ``weekday``.

        ``None`` when the shift is not associated with that weekday.
        """

        raise NotImplementedError

    def delete(self, shift_id: int) -> bool:
        """Delete allotments referencing the shift, then the shift and its day rows."""

        raise NotImplementedError
