"""
Time calculations for bookings.

Times inside the engine are minutes since midnight so that slot stepping and
interval overlap are plain integer arithmetic. Strings only appear at the
edges ("HH:mm" in, "HH:mm" out).
"""

import logging
from datetime import date
from typing import Optional

from ...config import BOOKING_DEFAULT_CLOSE_TIME, BOOKING_DEFAULT_OPEN_TIME
from ...exceptions import InvalidArgument
from ...shared.validators import validate_time_24h
from .schemas import DayHours, coerce_model

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

# Indexed by date.weekday(): Monday is 0
WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[day.weekday()]


def time_to_minutes(value: str) -> int:
    """Convert "HH:mm" to minutes since midnight"""
    hours, minutes = validate_time_24h(value).split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(total_minutes: int) -> str:
    """Convert minutes since midnight to "HH:mm" """
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02d}:{minutes:02d}"


def parse_operating_hours(raw) -> dict[str, DayHours]:
    """
    Normalize an operating-hours mapping.

    Keys are weekday names in any case; values are DayHours or dicts.
    Returns an empty dict when nothing is configured.

    Raises:
        InvalidArgument: If a key is not a weekday or a value is malformed
    """
    if not raw:
        return {}
    if not isinstance(raw, dict):
        raise InvalidArgument(f"Operating hours must be a mapping of weekday to hours, got {type(raw).__name__}")

    hours = {}
    for key, value in raw.items():
        day = str(key).strip().lower()
        if day not in WEEKDAY_NAMES:
            raise InvalidArgument(f"Unknown weekday in operating hours: {key!r}")
        hours[day] = coerce_model(DayHours, value, f"operating hours for {day}")
    return hours


def resolve_day_hours(day: date, operating_hours) -> Optional[tuple[int, int]]:
    """
    Work out the open and close minutes for a date.

    Returns None when the restaurant is closed that day. A weekday with no
    configured hours, or with open/close missing, falls back to the default
    hours. A close time at or before the open time runs past midnight and is
    clamped to the end of the day.
    """
    hours = parse_operating_hours(operating_hours)
    name = weekday_name(day)
    day_hours = hours.get(name)

    open_time, close_time = BOOKING_DEFAULT_OPEN_TIME, BOOKING_DEFAULT_CLOSE_TIME
    if day_hours is not None:
        if day_hours.closed:
            logger.debug(f"Restaurant is closed on {name}")
            return None
        if day_hours.open and day_hours.close:
            open_time, close_time = day_hours.open, day_hours.close
    else:
        logger.debug(f"No operating hours for {name}, using defaults {open_time}-{close_time}")

    open_minutes = time_to_minutes(open_time)
    close_minutes = time_to_minutes(close_time)
    if close_minutes <= open_minutes:
        close_minutes = MINUTES_PER_DAY

    return open_minutes, close_minutes


def generate_candidate_times(
    open_minutes: int,
    close_minutes: int,
    interval_minutes: int,
    service_duration_minutes: int = 0,
) -> list[int]:
    """Candidate start times from open, stepped by the interval, leaving room for service before close"""
    if interval_minutes <= 0:
        raise InvalidArgument(f"Slot interval must be greater than 0, got {interval_minutes}")
    if service_duration_minutes < 0:
        raise InvalidArgument(f"Service duration cannot be negative, got {service_duration_minutes}")

    candidates = []
    current = open_minutes
    while current < close_minutes and current + service_duration_minutes <= close_minutes:
        candidates.append(current)
        current += interval_minutes
    return candidates


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open interval overlap: [start_a, end_a) and [start_b, end_b)"""
    return start_a < end_b and start_b < end_a
