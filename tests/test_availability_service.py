from datetime import datetime, timedelta, timezone

import pytest

from tableside.domain.bookings.availability_service import (
    generate_slots,
    get_slot_ceiling,
    has_booking_conflict,
)
from tableside.domain.bookings.schemas import Booking, TimeSlot
from tableside.exceptions import InvalidArgument

from .conftest import FRIDAY, SATURDAY, SUNDAY, TUESDAY


def slot_at(slots, time):
    return next(s for s in slots if s.time == time)


# ============================================================================
# SLOT GENERATION
# ============================================================================


def test_closed_day_has_no_slots(operating_hours, now):
    assert generate_slots(SUNDAY, 2, operating_hours, [], now=now) == []


def test_friday_evening_scenario(operating_hours, now):
    """One booking of 4 at 19:00, 20-guest ceiling: remaining = ceiling - booked guests"""
    bookings = [{"date": "2026-10-16", "time": "19:00", "guests": 4, "status": "CONFIRMED"}]

    slots = generate_slots(
        FRIDAY, 4, operating_hours, bookings, 30, now=now, default_ceiling=20, service_duration_minutes=0
    )
    evening = slot_at(slots, "19:00")
    assert evening.available is True
    assert evening.remainingCapacity == 16

    slots = generate_slots(
        FRIDAY, 20, operating_hours, bookings, 30, now=now, default_ceiling=20, service_duration_minutes=0
    )
    assert slot_at(slots, "19:00").available is False
    assert slot_at(slots, "18:30").available is True


def test_slots_are_chronological_and_unique(operating_hours, now):
    slots = generate_slots(FRIDAY, 2, operating_hours, [], now=now, service_duration_minutes=0)
    times = [s.time for s in slots]
    assert times == ["17:00", "17:30", "18:00", "18:30", "19:00", "19:30", "20:00", "20:30", "21:00", "21:30"]
    assert len(set(times)) == len(times)


def test_default_service_buffer_trims_late_slots(operating_hours, now):
    slots = generate_slots(FRIDAY, 2, operating_hours, [], now=now)
    assert slots[-1].time == "20:00"


def test_custom_interval(operating_hours, now):
    slots = generate_slots(FRIDAY, 2, operating_hours, [], 60, now=now, service_duration_minutes=0)
    assert [s.time for s in slots] == ["17:00", "18:00", "19:00", "20:00", "21:00"]


def test_twelve_hour_operating_hours(operating_hours, now):
    slots = generate_slots(SATURDAY, 2, operating_hours, [], now=now, service_duration_minutes=0)
    assert slots[0].time == "17:00"
    assert slots[-1].time == "22:30"


def test_default_hours_when_unconfigured(now):
    slots = generate_slots(TUESDAY, 2, {}, [], now=now, service_duration_minutes=0)
    assert slots[0].time == "11:00"
    assert slots[-1].time == "21:30"


def test_capacity_property_holds_for_every_slot(operating_hours, now, tables):
    bookings = [
        {"time": "18:00", "guests": 4},
        {"time": "18:00", "guests": 6},
        {"time": "19:00", "guests": 12},
        {"time": "19:30", "guests": 2, "status": "cancelled"},
    ]
    booked = {"18:00": 10, "19:00": 12}
    ceiling = get_slot_ceiling(tables)
    guests = 3

    slots = generate_slots(FRIDAY, guests, operating_hours, bookings, now=now, tables=tables)

    for slot in slots:
        expected = max(0, ceiling - booked.get(slot.time, 0))
        assert slot.remainingCapacity == expected
        assert slot.available == (slot.remainingCapacity >= guests)


def test_cancelled_bookings_do_not_count(operating_hours, now):
    bookings = [{"time": "19:00", "guests": 8, "status": "CANCELLED"}]
    slots = generate_slots(FRIDAY, 2, operating_hours, bookings, now=now, default_ceiling=10)
    assert slot_at(slots, "19:00").remainingCapacity == 10


def test_bookings_on_other_dates_are_ignored(operating_hours, now):
    bookings = [{"date": "2026-10-17", "time": "19:00", "guests": 8}]
    slots = generate_slots(FRIDAY, 2, operating_hours, bookings, now=now, default_ceiling=10)
    assert slot_at(slots, "19:00").remainingCapacity == 10


def test_only_exact_start_times_count(operating_hours, now):
    bookings = [{"time": "19:00", "guests": 8}]
    slots = generate_slots(FRIDAY, 2, operating_hours, bookings, now=now, default_ceiling=10)
    assert slot_at(slots, "18:30").remainingCapacity == 10
    assert slot_at(slots, "19:30").remainingCapacity == 10


def test_overbooked_slot_floors_at_zero(operating_hours, now):
    bookings = [{"time": "19:00", "guests": 15}]
    slots = generate_slots(FRIDAY, 1, operating_hours, bookings, now=now, default_ceiling=10)
    assert slot_at(slots, "19:00").remainingCapacity == 0
    assert slot_at(slots, "19:00").available is False


def test_party_larger_than_ceiling_marks_everything_unavailable(operating_hours, now, tables):
    slots = generate_slots(FRIDAY, 13, operating_hours, [], now=now, tables=tables)
    assert slots
    assert not any(s.available for s in slots)


def test_past_slots_are_unavailable(operating_hours):
    now = datetime(2026, 10, 16, 18, 0)
    slots = generate_slots(FRIDAY, 2, operating_hours, [], now=now, service_duration_minutes=0)
    assert slot_at(slots, "17:30").available is False
    assert slot_at(slots, "18:00").available is False
    assert slot_at(slots, "18:30").available is True


def test_timezone_aware_now(operating_hours):
    now = datetime(2026, 10, 16, 18, 0, tzinfo=timezone(timedelta(hours=2)))
    slots = generate_slots(FRIDAY, 2, operating_hours, [], now=now, service_duration_minutes=0)
    assert slot_at(slots, "18:00").available is False
    assert slot_at(slots, "18:30").available is True


def test_accepts_models_and_string_date(operating_hours, now):
    bookings = [Booking(time="19:00", guests=4)]
    slots = generate_slots("2026-10-16", 2, operating_hours, bookings, now=now, default_ceiling=10)
    assert all(isinstance(s, TimeSlot) for s in slots)
    assert slot_at(slots, "19:00").remainingCapacity == 6


def test_generation_is_deterministic(operating_hours, now, tables):
    bookings = [{"time": "19:00", "guests": 4}, {"time": "18:00", "guests": 2}]
    first = generate_slots(FRIDAY, 2, operating_hours, bookings, now=now, tables=tables)
    second = generate_slots(FRIDAY, 2, operating_hours, bookings, now=now, tables=tables)
    assert [s.model_dump() for s in first] == [s.model_dump() for s in second]


def test_slot_serializes_with_wire_names(operating_hours, now):
    slot = generate_slots(FRIDAY, 2, operating_hours, [], now=now)[0]
    assert slot.model_dump() == {"time": "17:00", "available": True, "remainingCapacity": 20}


@pytest.mark.parametrize("guests", [0, -1])
def test_rejects_non_positive_guests(operating_hours, now, guests):
    with pytest.raises(InvalidArgument):
        generate_slots(FRIDAY, guests, operating_hours, [], now=now)


def test_rejects_bad_inputs(operating_hours, now):
    with pytest.raises(InvalidArgument):
        generate_slots("16-10-2026", 2, operating_hours, [], now=now)
    with pytest.raises(InvalidArgument):
        generate_slots(FRIDAY, 2, operating_hours, [{"time": "7pm", "guests": 2}], now=now)
    with pytest.raises(InvalidArgument):
        generate_slots(FRIDAY, 2, operating_hours, [], 0, now=now)
    with pytest.raises(InvalidArgument):
        generate_slots(FRIDAY, 2, operating_hours, [], now="2026-10-01")


def test_closed_day_still_validates_guests(operating_hours, now):
    with pytest.raises(InvalidArgument):
        generate_slots(SUNDAY, 0, operating_hours, [], now=now)


# ============================================================================
# SLOT CEILING
# ============================================================================


def test_ceiling_sums_active_tables(tables):
    assert get_slot_ceiling(tables) == 12
    tables[2]["isActive"] = False
    assert get_slot_ceiling(tables) == 6


def test_ceiling_defaults_without_tables():
    assert get_slot_ceiling([]) == 20
    assert get_slot_ceiling(None, default_ceiling=35) == 35


def test_ceiling_is_zero_when_all_tables_inactive():
    assert get_slot_ceiling([{"id": 1, "capacity": 4, "isActive": False}]) == 0


@pytest.mark.parametrize("default_ceiling", ["20", -5, True, 2.5])
def test_ceiling_rejects_bad_default(default_ceiling):
    with pytest.raises(InvalidArgument):
        get_slot_ceiling(None, default_ceiling=default_ceiling)


def test_generate_slots_rejects_bad_default_ceiling(now):
    with pytest.raises(InvalidArgument):
        generate_slots(FRIDAY, 2, {}, [], now=now, default_ceiling="20")
    with pytest.raises(InvalidArgument):
        generate_slots(FRIDAY, 2, {}, [], now=now, default_ceiling=-5)


def test_zero_default_ceiling_is_allowed():
    assert get_slot_ceiling([], default_ceiling=0) == 0


# ============================================================================
# BOOKING CONFLICTS
# ============================================================================


def test_conflict_when_intervals_overlap():
    bookings = [{"id": "b1", "time": "19:00", "guests": 2, "status": "CONFIRMED"}]
    assert has_booking_conflict("18:00", bookings)
    assert has_booking_conflict("20:30", bookings)
    assert not has_booking_conflict("21:00", bookings)
    assert not has_booking_conflict("16:30", bookings, 30)


def test_conflict_uses_booking_duration():
    bookings = [{"id": "b1", "time": "19:00", "guests": 2, "duration": 60}]
    assert not has_booking_conflict("20:00", bookings)
    assert has_booking_conflict("19:45", bookings)


def test_conflict_ignores_released_bookings():
    bookings = [
        {"id": "b1", "time": "19:00", "guests": 2, "status": "CANCELLED"},
        {"id": "b2", "time": "19:00", "guests": 2, "status": "NO_SHOW"},
        {"id": "b3", "time": "19:00", "guests": 2, "status": "COMPLETED"},
    ]
    assert not has_booking_conflict("19:00", bookings)


def test_conflict_scoped_to_table_and_excluding_self():
    bookings = [
        {"id": "b1", "time": "19:00", "guests": 2, "tableId": "T1"},
        {"id": "b2", "time": "19:00", "guests": 4, "tableId": "T2"},
    ]
    assert has_booking_conflict("19:30", bookings, table_id="T1")
    assert not has_booking_conflict("19:30", bookings, table_id="T3")
    assert not has_booking_conflict("19:30", bookings, table_id="T1", exclude_booking_id="b1")


def test_conflict_rejects_bad_duration():
    with pytest.raises(InvalidArgument):
        has_booking_conflict("19:00", [], 0)


def test_boolean_party_size_in_existing_booking_is_rejected(operating_hours, now):
    bookings = [{"time": "19:00", "guests": True}]
    with pytest.raises(InvalidArgument):
        generate_slots(FRIDAY, 2, operating_hours, bookings, now=now, default_ceiling=10)


def test_conflict_skips_bookings_on_other_dates():
    bookings = [{"id": "b1", "date": "2026-10-17", "time": "19:00", "guests": 2, "status": "CONFIRMED"}]
    assert not has_booking_conflict("19:00", bookings, date=FRIDAY)
    assert has_booking_conflict("19:00", bookings, date=SATURDAY)
    assert has_booking_conflict("19:00", bookings, date="2026-10-17")


def test_conflict_counts_undated_bookings_for_any_date():
    bookings = [{"id": "b1", "time": "19:00", "guests": 2}]
    assert has_booking_conflict("19:30", bookings, date=TUESDAY)
