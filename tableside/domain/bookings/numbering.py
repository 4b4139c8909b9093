"""Booking reference numbers"""

from ...shared.validators import parse_date, validate_non_negative_int


def generate_booking_number(day, existing_count: int) -> str:
    """
    Build the next booking number for a day, e.g. BKG-20261017-005.

    Args:
        day: Creation date (date, datetime or "YYYY-MM-DD")
        existing_count: Bookings already created that day

    Raises:
        InvalidArgument: If existing_count is negative or day is malformed
    """
    validate_non_negative_int(existing_count, "existing_count")

    created = parse_date(day)
    return f"BKG-{created.strftime('%Y%m%d')}-{existing_count + 1:03d}"
