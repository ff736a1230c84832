from datetime import date, time

import pytest

from attendance_tracker.attendance.factory import PunchStrategyFactory
from attendance_tracker.attendance.strategies.afternoon_out_strategy import AfternoonOutStrategy
from attendance_tracker.attendance.strategies.morning_in_strategy import MorningInStrategy
from attendance_tracker.attendance.strategies.record_only_strategy import RecordOnlyStrategy
from attendance_tracker.core.enums import AttendanceStatus, LogType
from attendance_tracker.shifts.model import ResolvedShift


def _shift(grace=5):
    return ResolvedShift(
        shift_id=1,
        shift_name="Morning",
        work_date=date(2024, 1, 8),
        weekday=1,
        morning_in=time(8, 0),
        morning_out=time(12, 0),
        afternoon_in=time(13, 0),
        afternoon_out=time(17, 0),
        grace_period_minutes=grace,
    )


@pytest.mark.parametrize(
    "log_type, expected",
    [
        (LogType.MORNING_IN, MorningInStrategy),
        (LogType.MORNING_OUT, RecordOnlyStrategy),
        (LogType.AFTERNOON_IN, RecordOnlyStrategy),
        (LogType.AFTERNOON_OUT, AfternoonOutStrategy),
    ],
)
def test_factory_picks_strategy_per_slot(log_type, expected):
    assert isinstance(PunchStrategyFactory().for_log_type(log_type), expected)


@pytest.mark.parametrize(
    "punch, late, status",
    [
        (time(8, 10), 5, AttendanceStatus.LATE),
        (time(8, 3), 0, AttendanceStatus.ON_TIME),
        (time(8, 5), 0, AttendanceStatus.ON_TIME),
        (time(8, 5, 59), 0, AttendanceStatus.ON_TIME),
        (time(8, 6), 1, AttendanceStatus.LATE),
        (time(7, 30), 0, AttendanceStatus.ON_TIME),
    ],
)
def test_morning_in_lateness_after_grace(punch, late, status):
    decision = MorningInStrategy().evaluate(punch_time=punch, shift=_shift())
    assert decision.minutes_late == late
    assert decision.minutes_early == 0
    assert decision.status == status


@pytest.mark.parametrize(
    "punch, early, status",
    [
        (time(16, 30), 30, AttendanceStatus.EARLY_LEAVE),
        (time(16, 59), 1, AttendanceStatus.EARLY_LEAVE),
        (time(17, 0), 0, AttendanceStatus.ON_TIME),
        (time(18, 15), 0, AttendanceStatus.ON_TIME),
    ],
)
def test_afternoon_out_early_leave_has_no_grace(punch, early, status):
    decision = AfternoonOutStrategy().evaluate(punch_time=punch, shift=_shift(grace=15))
    assert decision.minutes_early == early
    assert decision.minutes_late == 0
    assert decision.status == status


def test_record_only_leaves_status_untouched():
    decision = RecordOnlyStrategy().evaluate(punch_time=time(12, 45), shift=_shift())
    assert (decision.minutes_late, decision.minutes_early, decision.status) == (0, 0, None)


def test_inverted_shift_times_surface_as_large_lateness():
    shift = _shift(grace=0)
    inverted = ResolvedShift(**{**shift.__dict__, "morning_in": time(0, 0)})
    decision = MorningInStrategy().evaluate(punch_time=time(23, 0), shift=inverted)
    assert decision.minutes_late == 23 * 60


def test_partial_minutes_are_floored_in_both_directions():
    shift = _shift(grace=0)

    leave = AfternoonOutStrategy().evaluate(punch_time=time(16, 59, 1), shift=shift)
    assert (leave.minutes_early, leave.status) == (0, AttendanceStatus.ON_TIME)

    arrive = MorningInStrategy().evaluate(punch_time=time(8, 0, 59), shift=shift)
    assert (arrive.minutes_late, arrive.status) == (0, AttendanceStatus.ON_TIME)

    leave = AfternoonOutStrategy().evaluate(punch_time=time(16, 58, 59), shift=shift)
    assert leave.minutes_early == 1
