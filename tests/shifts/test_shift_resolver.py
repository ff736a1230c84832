from datetime import date, time, timedelta

from attendance_tracker.shifts.resolver import resolve_field

from ..conftest import OFFICE_TIMES


def test_resolve_field_prefers_override():
    assert resolve_field(None, 5) == 5
    assert resolve_field(0, 5) == 0
    assert resolve_field(time(7, 0), time(8, 0)) == time(7, 0)


def test_office_scenario_weekend_and_monday(container, office_shift):
    container.allotment_service.assign_shift(shift_id=office_shift, employees=[1], effective_from="2024-01-01")

    # 2024-01-06 is a Saturday.
    assert container.shift_resolver.resolve_shift(1, date(2024, 1, 6)) is None

    monday = container.shift_resolver.resolve_shift(1, date(2024, 1, 8))
    assert monday is not None
    assert monday.weekday == 1
    assert (monday.morning_in, monday.morning_out, monday.afternoon_in, monday.afternoon_out) == (
        time(8, 0),
        time(12, 0),
        time(13, 0),
        time(17, 0),
    )
    assert monday.grace_period_minutes == 10
    assert monday.has_override is False


def test_no_allotment_means_no_shift(container, office_shift):
    assert container.shift_resolver.resolve_shift(1, date(2024, 1, 8)) is None


def test_date_before_allotment_start_has_no_shift(container, office_shift):
    container.allotment_service.assign_shift(shift_id=office_shift, employees=[1], effective_from="2024-01-08")
    assert container.shift_resolver.resolve_shift(1, date(2024, 1, 5)) is None


def test_override_times_replace_base_for_that_weekday_only(container):
    shift_id = container.shift_service.create_shift(
        name="Friday short",
        base_times=OFFICE_TIMES,
        grace_period=10,
        weekdays=[1, 2, 3, 4],
        patterns=[
            dict(
                OFFICE_TIMES,
                weekdays=["friday"],
                afternoon_in="12:30",
                afternoon_out="15:00",
                grace_period_minutes=2,
            )
        ],
    )
    container.allotment_service.assign_shift(shift_id=shift_id, employees=[1], effective_from="2024-01-01")

    friday = container.shift_resolver.resolve_shift(1, date(2024, 1, 12))
    assert friday.has_override is True
    assert friday.afternoon_out == time(15, 0)
    assert friday.afternoon_in == time(12, 30)
    assert friday.morning_in == time(8, 0)
    assert friday.grace_period_minutes == 2

    thursday = container.shift_resolver.resolve_shift(1, date(2024, 1, 11))
    assert thursday.afternoon_out == time(17, 0)
    assert thursday.grace_period_minutes == 10


def test_override_without_grace_falls_back_to_base_grace(container):
    shift_id = container.shift_service.create_shift(
        name="Sat",
        base_times=OFFICE_TIMES,
        grace_period=7,
        patterns=[dict(OFFICE_TIMES, weekdays=[6], morning_in="09:00")],
    )
    container.allotment_service.assign_shift(shift_id=shift_id, employees=[1], effective_from="2024-01-01")

    saturday = container.shift_resolver.resolve_shift(1, date(2024, 1, 6))
    assert saturday.morning_in == time(9, 0)
    assert saturday.grace_period_minutes == 7


def test_sunday_resolves_as_weekday_seven(container):
    shift_id = container.shift_service.create_shift(name="Sun", base_times=OFFICE_TIMES, weekdays=[0])
    container.allotment_service.assign_shift(shift_id=shift_id, employees=[1], effective_from="2024-01-01")

    sunday = container.shift_resolver.resolve_shift(1, date(2024, 1, 7))
    assert sunday is not None
    assert sunday.weekday == 7


def test_truncation_keeps_old_shift_until_day_before(container, office_shift):
    night_id = container.shift_service.create_shift(
        name="Late",
        base_times={"morning_in": "10:00", "morning_out": "14:00", "afternoon_in": "15:00", "afternoon_out": "19:00"},
        weekdays=[1, 2, 3, 4, 5, 6, 7],
    )
    container.allotment_service.assign_shift(shift_id=office_shift, employees=[1], effective_from="2024-01-01")

    switch = date(2024, 1, 10)
    container.allotment_service.assign_shift(shift_id=night_id, employees=[1], effective_from=switch)

    assert container.shift_resolver.resolve_shift(1, switch - timedelta(days=1)).shift_id == office_shift
    assert container.shift_resolver.resolve_shift(1, switch).shift_id == night_id


def test_latest_effective_from_wins_when_ranges_overlap(container, office_shift, allotments_repo):
    other = container.shift_service.create_shift(name="Other", base_times=OFFICE_TIMES, weekdays=[1, 2, 3, 4, 5])
    # Future-dated first, then an open-ended assignment starting earlier: the
    # default policy leaves the two overlapping from 2024-02-01 on.
    container.allotment_service.assign_shift(shift_id=other, employees=[1], effective_from="2024-02-01")
    container.allotment_service.assign_shift(shift_id=office_shift, employees=[1], effective_from="2024-01-01")

    assert len(allotments_repo.allotments_covering_date(1, date(2024, 2, 5))) == 2
    assert container.shift_resolver.resolve_shift(1, date(2024, 2, 5)).shift_id == other
    assert container.shift_resolver.resolve_shift(1, date(2024, 1, 29)).shift_id == office_shift
