"""Shared validation utilities"""

import re
from datetime import date, datetime
from typing import Union

from ..exceptions import InvalidArgument

# Same shape the booking forms accept: hour may omit its leading zero
TIME_24H_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")
TIME_12H_PATTERN = re.compile(r"^(0?[1-9]|1[0-2]):([0-5][0-9])\s*([AaPp][Mm])$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_time_24h(value: str) -> str:
    """
    Validate a 24-hour time string and normalize it to zero-padded HH:mm.

    Args:
        value: Time string such as "19:00" or "9:30"

    Returns:
        Normalized time string ("09:30")

    Raises:
        InvalidArgument: If the string is not a valid HH:mm time
    """
    if not isinstance(value, str):
        raise InvalidArgument(f"Invalid time format (HH:mm): {value!r}")

    match = TIME_24H_PATTERN.match(value.strip())
    if not match:
        raise InvalidArgument(f"Invalid time format (HH:mm): {value!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    return f"{hours:02d}:{minutes:02d}"


def convert_to_24_hour(value: str) -> str:
    """
    Convert a 12-hour time ("09:00 AM", "10:30 PM") to 24-hour HH:mm.

    Strings already in 24-hour form are validated and returned normalized.

    Raises:
        InvalidArgument: If the string is neither a 12-hour nor a 24-hour time
    """
    if not isinstance(value, str):
        raise InvalidArgument(f"Invalid time format: {value!r}")

    match = TIME_12H_PATTERN.match(value.strip())
    if not match:
        return validate_time_24h(value)

    hours, minutes, period = int(match.group(1)), int(match.group(2)), match.group(3).upper()
    if period == "PM" and hours != 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0

    return f"{hours:02d}:{minutes:02d}"


def validate_date_string(value: str) -> str:
    """
    Validate a YYYY-MM-DD date string.

    Raises:
        InvalidArgument: If the format is wrong or the date does not exist
    """
    if not isinstance(value, str) or not DATE_PATTERN.match(value.strip()):
        raise InvalidArgument(f"Invalid date format. Expected YYYY-MM-DD: {value!r}")

    try:
        datetime.strptime(value.strip(), "%Y-%m-%d")
    except ValueError:
        raise InvalidArgument(f"Invalid calendar date: {value!r}") from None

    return value.strip()


def parse_date(value: Union[date, datetime, str]) -> date:
    """Accept a date, a datetime or a YYYY-MM-DD string and return a date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(validate_date_string(value), "%Y-%m-%d").date()


def validate_positive_int(value, field: str) -> int:
    """Reject booleans, non-integers and values below 1"""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{field} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidArgument(f"{field} must be greater than 0, got {value}")
    return value


def validate_non_negative_int(value, field: str) -> int:
    """Reject booleans, non-integers and negative values"""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{field} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidArgument(f"{field} must not be negative, got {value}")
    return value
