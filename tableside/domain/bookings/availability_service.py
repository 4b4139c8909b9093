"""Availability service - time slots, slot capacity and booking conflicts"""

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Optional

from ...config import (
    BOOKING_DEFAULT_DURATION_MINUTES,
    BOOKING_DEFAULT_SLOT_CEILING,
    BOOKING_SERVICE_DURATION_MINUTES,
    BOOKING_SLOT_INTERVAL_MINUTES,
)
from ...exceptions import InvalidArgument
from ...shared.validators import parse_date, validate_non_negative_int, validate_positive_int
from .schemas import (
    BLOCKING_STATUSES,
    Booking,
    BookingStatus,
    Table,
    TimeSlot,
    coerce_models,
)
from .time_calculator import (
    generate_candidate_times,
    intervals_overlap,
    minutes_to_time,
    resolve_day_hours,
    time_to_minutes,
)

logger = logging.getLogger(__name__)


def get_slot_ceiling(tables, default_ceiling: Optional[int] = None) -> int:
    """
    Maximum number of guests a single slot can hold.

    With tables configured this is the sum of active table capacities (which
    may be 0 if every table is inactive). With no tables at all the flat
    default ceiling applies.
    """
    if default_ceiling is not None:
        validate_non_negative_int(default_ceiling, "default_ceiling")

    tables = coerce_models(Table, tables, "table")
    if not tables:
        return BOOKING_DEFAULT_SLOT_CEILING if default_ceiling is None else default_ceiling
    return sum(t.capacity for t in tables if t.isActive)


def count_booked_guests(bookings: list[Booking], day: date) -> dict[int, int]:
    """Guests already booked per start minute, ignoring cancelled bookings and other dates"""
    booked = defaultdict(int)
    for booking in bookings:
        if booking.status == BookingStatus.CANCELLED:
            continue
        if booking.date is not None and booking.date != day:
            continue
        booked[time_to_minutes(booking.time)] += booking.guests
    return booked


def generate_slots(
    date,
    guests: int,
    operating_hours,
    existing_bookings,
    slot_interval_minutes: int = BOOKING_SLOT_INTERVAL_MINUTES,
    *,
    now: datetime,
    tables=None,
    default_ceiling: Optional[int] = None,
    service_duration_minutes: Optional[int] = None,
) -> list[TimeSlot]:
    """
    Build the bookable time slots for a date.

    Args:
        date: Requested date (date, datetime or "YYYY-MM-DD")
        guests: Party size being booked
        operating_hours: Mapping of weekday name to DayHours/dict
        existing_bookings: Bookings already taken (Booking/dict/ORM rows)
        slot_interval_minutes: Spacing between slots
        now: Current time; slots at or before it are unavailable
        tables: Restaurant tables used to derive the slot ceiling
        default_ceiling: Ceiling used when no tables are configured
        service_duration_minutes: Seating time that must fit before close

    Returns:
        Chronological list of TimeSlot. Empty when the restaurant is closed.

    Raises:
        InvalidArgument: On malformed input
    """
    day = parse_date(date)
    validate_positive_int(guests, "guests")
    validate_positive_int(slot_interval_minutes, "slot_interval_minutes")
    if not isinstance(now, datetime):
        raise InvalidArgument(f"now must be a datetime, got {type(now).__name__}")
    if service_duration_minutes is None:
        service_duration_minutes = BOOKING_SERVICE_DURATION_MINUTES

    bookings = coerce_models(Booking, existing_bookings, "booking")
    ceiling = get_slot_ceiling(tables, default_ceiling)

    day_hours = resolve_day_hours(day, operating_hours)
    if day_hours is None:
        logger.info(f"📅 No slots for {day.isoformat()}: restaurant closed")
        return []

    open_minutes, close_minutes = day_hours
    candidates = generate_candidate_times(
        open_minutes, close_minutes, slot_interval_minutes, service_duration_minutes
    )
    booked = count_booked_guests(bookings, day)

    logger.debug(
        f"Generating slots for {day.isoformat()} "
        f"({minutes_to_time(open_minutes)}-{minutes_to_time(close_minutes % (24 * 60))}), "
        f"guests={guests}, ceiling={ceiling}, candidates={len(candidates)}"
    )

    slots = []
    for minutes in candidates:
        remaining = max(0, ceiling - booked.get(minutes, 0))
        hours, mins = divmod(minutes, 60)
        starts_at = datetime(day.year, day.month, day.day, hours, mins, tzinfo=now.tzinfo)
        slots.append(
            TimeSlot(
                time=minutes_to_time(minutes),
                available=starts_at > now and remaining >= guests,
                remainingCapacity=remaining,
            )
        )
    return slots


def has_booking_conflict(
    time: str,
    existing_bookings,
    duration_minutes: int = BOOKING_DEFAULT_DURATION_MINUTES,
    *,
    date=None,
    table_id=None,
    exclude_booking_id=None,
) -> bool:
    """
    Check whether a booking starting at `time` would overlap an existing one.

    Only pending and confirmed bookings block. Bookings without a duration
    are assumed to last the default booking duration. When date is set,
    bookings dated for another day are skipped (undated ones still count).
    When table_id is set only bookings on that table count; exclude_booking_id
    skips the booking being edited.
    """
    validate_positive_int(duration_minutes, "duration_minutes")
    day = parse_date(date) if date is not None else None
    start = time_to_minutes(time)
    end = start + duration_minutes

    for booking in coerce_models(Booking, existing_bookings, "booking"):
        if booking.status not in BLOCKING_STATUSES:
            continue
        if day is not None and booking.date is not None and booking.date != day:
            continue
        if table_id is not None and booking.tableId != table_id:
            continue
        if exclude_booking_id is not None and booking.id == exclude_booking_id:
            continue

        booking_start = time_to_minutes(booking.time)
        booking_end = booking_start + (booking.duration or BOOKING_DEFAULT_DURATION_MINUTES)
        if intervals_overlap(start, end, booking_start, booking_end):
            logger.debug(f"Conflict at {time}: booking {booking.id} ({booking.time}, {booking.guests} guests)")
            return True

    return False
