from datetime import time

import pytest

from attendance_tracker.core.enums import AuditAction
from attendance_tracker.core.exceptions import (
    InvalidPatternError,
    InvalidTimeFormatError,
    MissingFieldError,
    ShiftNotFoundError,
    ValidationError,
)

from ..conftest import OFFICE_TIMES


def test_create_shift_persists_definition_days_and_overrides(container, shifts_repo):
    shift_id = container.shift_service.create_shift(
        name="Office",
        base_times=OFFICE_TIMES,
        grace_period=10,
        weekdays=["monday", 2, "3", 0],
        patterns=[
            {
                "weekdays": ["friday"],
                "morning_in": "7:30 AM",
                "morning_out": "11:30",
                "afternoon_in": "12:30",
                "afternoon_out": "16:00",
            }
        ],
    )

    shift = shifts_repo.get_shift(shift_id)
    assert shift.definition.shift_name == "Office"
    assert shift.definition.morning_in == time(8, 0)
    assert shift.definition.grace_period_minutes == 10
    # Pattern weekdays are associated too.
    assert shift.weekdays == frozenset({1, 2, 3, 5, 7})
    assert set(shift.overrides) == {5}
    assert shift.overrides[5].morning_in == time(7, 30)
    assert shift.overrides[5].grace_period_minutes is None


def test_create_shift_defaults_grace_period(container, shifts_repo):
    shift_id = container.shift_service.create_shift(name="Default", base_times=OFFICE_TIMES, weekdays=[1])
    assert shifts_repo.get_by_id(shift_id).grace_period_minutes == 5


def test_create_shift_emits_audit_envelope(container, audit_sink):
    shift_id = container.shift_service.create_shift(
        name="Office", base_times=OFFICE_TIMES, weekdays=[1], actor="admin"
    )

    event = audit_sink.events[-1]
    assert event.action == AuditAction.CREATE
    assert event.table_name == "shifts"
    assert event.record_id == shift_id
    assert event.actor == "admin"
    payload = event.to_dict()
    assert payload["tableName"] == "shifts"
    assert '"morning_in": "08:00:00"' in payload["afterJson"]
    assert payload["beforeJson"] is None


def test_missing_name_is_reported(container):
    with pytest.raises(MissingFieldError) as exc:
        container.shift_service.create_shift(name="  ", base_times=OFFICE_TIMES)
    assert exc.value.field == "shift_name"


@pytest.mark.parametrize("field", ["morning_in", "morning_out", "afternoon_in", "afternoon_out"])
def test_missing_base_time_is_reported(container, field):
    times = dict(OFFICE_TIMES)
    times.pop(field)
    with pytest.raises(MissingFieldError) as exc:
        container.shift_service.create_shift(name="Office", base_times=times)
    assert exc.value.field == field


def test_unparseable_base_time_names_field_and_value(container):
    times = dict(OFFICE_TIMES, afternoon_out="25:00")
    with pytest.raises(InvalidTimeFormatError) as exc:
        container.shift_service.create_shift(name="Office", base_times=times)
    assert exc.value.field == "afternoon_out"
    assert exc.value.value == "25:00"


def test_pattern_without_weekday_names_its_index(container):
    patterns = [
        dict(OFFICE_TIMES, weekdays=[1]),
        dict(OFFICE_TIMES, weekdays=["someday"]),
    ]
    with pytest.raises(InvalidPatternError) as exc:
        container.shift_service.create_shift(name="Office", base_times=OFFICE_TIMES, patterns=patterns)
    assert exc.value.index == 1


def test_pattern_with_bad_time_names_its_index(container):
    patterns = [dict(OFFICE_TIMES, weekdays=[6], morning_out="noon")]
    with pytest.raises(InvalidPatternError) as exc:
        container.shift_service.create_shift(name="Office", base_times=OFFICE_TIMES, patterns=patterns)
    assert exc.value.index == 0
    assert "morning_out" in exc.value.reason


def test_pattern_missing_a_time_is_invalid(container):
    pattern = dict(OFFICE_TIMES, weekdays=[6])
    pattern.pop("afternoon_in")
    with pytest.raises(InvalidPatternError):
        container.shift_service.create_shift(name="Office", base_times=OFFICE_TIMES, patterns=[pattern])


def test_negative_grace_is_rejected(container):
    with pytest.raises(ValidationError) as exc:
        container.shift_service.create_shift(name="Office", base_times=OFFICE_TIMES, grace_period=-1)
    assert exc.value.field == "grace_period_minutes"


def test_resubmitted_weekday_replaces_earlier_pattern(container, shifts_repo):
    patterns = [
        dict(OFFICE_TIMES, weekdays=[6], morning_in="09:00"),
        dict(OFFICE_TIMES, weekdays=["saturday"], morning_in="10:00", grace_period_minutes=0),
    ]
    shift_id = container.shift_service.create_shift(name="Weekend", base_times=OFFICE_TIMES, patterns=patterns)

    overrides = shifts_repo.get_shift(shift_id).overrides
    assert list(overrides) == [6]
    assert overrides[6].morning_in == time(10, 0)
    assert overrides[6].grace_period_minutes == 0


def test_list_shifts_groups_identical_overrides(container):
    container.shift_service.create_shift(
        name="Split",
        base_times=OFFICE_TIMES,
        weekdays=[1, 2, 3],
        patterns=[
            dict(OFFICE_TIMES, weekdays=[4, 5], morning_in="07:00"),
            dict(OFFICE_TIMES, weekdays=[6], morning_in="07:00"),
            dict(OFFICE_TIMES, weekdays=[7], morning_in="09:00"),
        ],
    )

    [listing] = container.shift_service.list_shifts()
    data = listing.to_dict()
    assert data["weekdays"] == [1, 2, 3, 4, 5, 6, 7]
    assert [p["weekdays"] for p in data["patterns"]] == [[4, 5, 6], [7]]
    assert data["patterns"][0]["morning_in"] == "07:00:00"
    assert data["morning_in"] == "08:00:00"


def test_delete_shift_removes_allotments_first(container, office_shift, allotments_repo, audit_sink):
    container.allotment_service.assign_shift(shift_id=office_shift, employees=[1, 2], effective_from="2024-01-01")
    assert len(allotments_repo.rows) == 2

    container.shift_service.delete_shift(office_shift, actor="admin")

    assert allotments_repo.rows == {}
    with pytest.raises(ShiftNotFoundError):
        container.shift_service.get_shift(office_shift)
    assert audit_sink.events[-1].action == AuditAction.DELETE
    assert audit_sink.events[-1].before_json is not None


def test_delete_unknown_shift(container):
    with pytest.raises(ShiftNotFoundError):
        container.shift_service.delete_shift(404)


def test_pattern_that_is_not_an_object_names_its_index(container, shifts_repo):
    good = {"weekdays": [1], **OFFICE_TIMES}
    with pytest.raises(InvalidPatternError) as exc:
        container.shift_service.create_shift(name="X", base_times=OFFICE_TIMES, patterns=[good, "Mon 08:00"])

    assert exc.value.index == 1
    assert shifts_repo.list_all() == []


@pytest.mark.parametrize("patterns", ["Mon 08:00", {"weekdays": [1], **OFFICE_TIMES}, 5])
def test_patterns_must_be_a_list(container, patterns):
    with pytest.raises(ValidationError) as exc:
        container.shift_service.create_shift(name="X", base_times=OFFICE_TIMES, patterns=patterns)
    assert exc.value.field == "patterns"


def test_single_weekday_string_is_one_day(container, shifts_repo):
    shift_id = container.shift_service.create_shift(name="X", base_times=OFFICE_TIMES, weekdays="Monday")
    assert shifts_repo.get_shift(shift_id).weekdays == frozenset({1})
