"""
Bookings Domain

Pure availability logic for table reservations. Everything here works on data
the caller has already fetched (operating hours, bookings, tables) and returns
pydantic models ready for JSON serialization. No database, network or clock
access happens inside this package; "now" is always passed in.

Structure:
├── schemas.py              # Booking, table, slot and request schemas
├── time_calculator.py      # Time parsing, operating hours, slot stepping
├── availability_service.py # Time slots, slot ceiling, booking conflicts
├── deposit_service.py      # No-show deposit heuristic
├── table_service.py        # Greedy table assignment and suggestion checks
└── numbering.py            # Booking reference numbers
"""

from .availability_service import generate_slots, get_slot_ceiling, has_booking_conflict
from .deposit_service import assess_deposit_risk
from .numbering import generate_booking_number
from .schemas import (
    AvailabilityQuery,
    Booking,
    BookingStatus,
    DayHours,
    DepositQuery,
    DepositRisk,
    OptimizeTablesRequest,
    SeatingRequest,
    Table,
    TableAssignment,
    TableOptimizationResult,
    TimeSlot,
)
from .table_service import optimize_tables, validate_assignments

__all__ = [
    "AvailabilityQuery",
    "Booking",
    "BookingStatus",
    "DayHours",
    "DepositQuery",
    "DepositRisk",
    "OptimizeTablesRequest",
    "SeatingRequest",
    "Table",
    "TableAssignment",
    "TableOptimizationResult",
    "TimeSlot",
    "assess_deposit_risk",
    "generate_booking_number",
    "generate_slots",
    "get_slot_ceiling",
    "has_booking_conflict",
    "optimize_tables",
    "validate_assignments",
]
