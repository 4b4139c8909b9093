"""Table booking availability engine"""

from .domain.bookings import (
    assess_deposit_risk,
    generate_booking_number,
    generate_slots,
    has_booking_conflict,
    optimize_tables,
    validate_assignments,
)
from .exceptions import InvalidArgument

__version__ = "0.1.0"

__all__ = [
    "InvalidArgument",
    "assess_deposit_risk",
    "generate_booking_number",
    "generate_slots",
    "has_booking_conflict",
    "optimize_tables",
    "validate_assignments",
]
