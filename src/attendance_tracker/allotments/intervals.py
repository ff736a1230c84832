"""Interval arithmetic over one employee's ordered allotments.

Allotments are closed date intervals; ``None`` as the upper bound stands for
"ongoing". ``plan_assignment`` is pure: it only describes the row changes and
leaves persisting them to the repository.
"""

from __future__ import annotations

from datetime import date, timedelta
from itertools import combinations
from typing import Iterable, Optional, Sequence

from ..core.enums import OverlapPolicy
from .model import AssignmentPlan, NewAllotment, ShiftAllotment

ONE_DAY = timedelta(days=1)


def ranges_overlap(a_from: date, a_to: Optional[date], b_from: date, b_to: Optional[date]) -> bool:
    a_before_b = a_to is not None and a_to < b_from
    b_before_a = b_to is not None and b_to < a_from
    return not (a_before_b or b_before_a)


def find_overlaps(allotments: Iterable[ShiftAllotment]) -> list[tuple[ShiftAllotment, ShiftAllotment]]:
    """Pairs of allotments for the same employee that share at least one date."""

    items = sorted(allotments, key=lambda a: (a.employee_id, a.effective_from))
    return [
        (a, b)
        for a, b in combinations(items, 2)
        if a.employee_id == b.employee_id
        and ranges_overlap(a.effective_from, a.effective_to, b.effective_from, b.effective_to)
    ]


def pick_active(candidates: Iterable[ShiftAllotment], day: date) -> Optional[ShiftAllotment]:
    """The allotment covering ``day``; the latest ``effective_from`` wins."""

    covering = [a for a in candidates if a.covers(day)]
    if not covering:
        return None
    return max(covering, key=lambda a: (a.effective_from, a.allotment_id))


def _plan_truncate_prior(
    existing: Sequence[ShiftAllotment], new: NewAllotment
) -> tuple[list[int], list[ShiftAllotment], list[NewAllotment]]:
    deletions: list[int] = []
    updates: list[ShiftAllotment] = []
    for a in existing:
        if a.effective_from == new.effective_from:
            deletions.append(a.allotment_id)
        elif a.effective_from < new.effective_from and (
            a.effective_to is None or a.effective_to >= new.effective_from
        ):
            updates.append(_with_bounds(a, a.effective_from, new.effective_from - ONE_DAY))
    return deletions, updates, []


def _plan_carve(
    existing: Sequence[ShiftAllotment], new: NewAllotment
) -> tuple[list[int], list[ShiftAllotment], list[NewAllotment]]:
    deletions: list[int] = []
    updates: list[ShiftAllotment] = []
    tails: list[NewAllotment] = []
    for a in existing:
        if not ranges_overlap(a.effective_from, a.effective_to, new.effective_from, new.effective_to):
            continue

        has_head = a.effective_from < new.effective_from
        has_tail = new.effective_to is not None and (a.effective_to is None or a.effective_to > new.effective_to)

        if has_head:
            updates.append(_with_bounds(a, a.effective_from, new.effective_from - ONE_DAY))
            if has_tail:
                tails.append(
                    NewAllotment(
                        employee_id=a.employee_id,
                        shift_id=a.shift_id,
                        effective_from=new.effective_to + ONE_DAY,
                        effective_to=a.effective_to,
                    )
                )
        elif has_tail:
            updates.append(_with_bounds(a, new.effective_to + ONE_DAY, a.effective_to))
        else:
            deletions.append(a.allotment_id)
    return deletions, updates, tails


def plan_assignment(
    existing: Sequence[ShiftAllotment],
    new: NewAllotment,
    *,
    policy: OverlapPolicy = OverlapPolicy.TRUNCATE_PRIOR,
) -> AssignmentPlan:
    """Describe how to insert ``new`` into ``existing`` (one employee's allotments).

    TRUNCATE_PRIOR: drop allotments with the same start, cut allotments that
    start earlier and reach into the new range back to the day before it.
    Allotments starting after the new one are not touched, so an open-ended
    assignment can still overlap a future-dated one.

    CARVE: remove the new range from every existing allotment, splitting an
    allotment in two when the new range sits strictly inside it.
    """

    mine = [a for a in existing if a.employee_id == new.employee_id]
    if OverlapPolicy(policy) == OverlapPolicy.CARVE:
        deletions, updates, tails = _plan_carve(mine, new)
    else:
        deletions, updates, tails = _plan_truncate_prior(mine, new)

    return AssignmentPlan(
        deletions=tuple(deletions),
        updates=tuple(updates),
        inserts=tuple(tails) + (new,),
    )


def _with_bounds(a: ShiftAllotment, effective_from: date, effective_to: Optional[date]) -> ShiftAllotment:
    return ShiftAllotment(
        allotment_id=a.allotment_id,
        employee_id=a.employee_id,
        shift_id=a.shift_id,
        effective_from=effective_from,
        effective_to=effective_to,
    )
