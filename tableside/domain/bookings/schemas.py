"""Booking domain schemas - Pydantic models for validation"""

import datetime as dt
import logging
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from ...config import BOOKING_MAX_GUESTS
from ...exceptions import InvalidArgument
from ...shared.validators import (
    convert_to_24_hour,
    parse_date,
    validate_date_string,
    validate_time_24h,
)

logger = logging.getLogger(__name__)

# Booking and table ids arrive as database cuids or integer keys
EntityId = Union[int, str]

# Largest party the table optimizer accepts in one request
MAX_OPTIMIZER_PARTY_SIZE = 100


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


# Statuses that still hold a table for the conflict check
BLOCKING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})


# ============================================================================
# INPUT ENTITIES (already fetched by the caller)
# ============================================================================


class DayHours(BaseModel):
    """Opening hours for one weekday"""

    open: Optional[str] = None
    close: Optional[str] = None
    closed: bool = False

    @field_validator("open", "close", mode="before")
    @classmethod
    def normalize_time(cls, v):
        # Settings page stores "09:00 AM"; seed data stores "09:00"
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return convert_to_24_hour(v)

    @field_validator("closed", mode="before")
    @classmethod
    def default_closed(cls, v):
        return False if v is None else v


class Booking(BaseModel):
    """Existing reservation as stored by the booking application"""

    id: Optional[EntityId] = None
    date: Optional[dt.date] = None
    time: str
    guests: int = Field(..., ge=1, strict=True)  # strict: True must not count as one guest
    status: BookingStatus = BookingStatus.PENDING
    tableId: Optional[EntityId] = None
    duration: Optional[int] = Field(None, ge=1, strict=True)

    class Config:
        from_attributes = True

    @field_validator("date", mode="before")
    @classmethod
    def parse_booking_date(cls, v):
        # ORM rows carry a midnight datetime
        if v is None:
            return v
        return parse_date(v)

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        return validate_time_24h(v)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class Table(BaseModel):
    """Dining table"""

    id: EntityId
    capacity: int = Field(..., ge=1, strict=True)
    isActive: bool = True
    number: Optional[EntityId] = None

    class Config:
        from_attributes = True


class SeatingRequest(BaseModel):
    """A booking to be placed by the table optimizer"""

    id: EntityId
    guests: int = Field(..., ge=1, strict=True)
    time: str

    class Config:
        from_attributes = True

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        return validate_time_24h(v)


# ============================================================================
# DERIVED RESULTS
# ============================================================================


class TimeSlot(BaseModel):
    time: str
    available: bool
    remainingCapacity: int


class DepositRisk(BaseModel):
    required: bool
    amount: float
    reasons: list[str] = Field(default_factory=list)


class TableAssignment(BaseModel):
    bookingId: EntityId
    tableId: EntityId


class TableOptimizationResult(BaseModel):
    assignments: list[TableAssignment]
    utilizationRate: float
    unassignedBookingIds: list[EntityId] = Field(default_factory=list)


# ============================================================================
# REQUEST SHAPES (validated by callers before invoking the engine)
# ============================================================================


class AvailabilityQuery(BaseModel):
    """Query parameters for a slot availability lookup"""

    date: str
    guests: int = 1

    @field_validator("date")
    @classmethod
    def validate_date(cls, v):
        return validate_date_string(v)

    @field_validator("guests")
    @classmethod
    def validate_guests(cls, v):
        if v < 1:
            raise ValueError("Guests must be a positive number")
        if v > BOOKING_MAX_GUESTS:
            raise ValueError(
                f"Maximum {BOOKING_MAX_GUESTS} guests per booking. Please contact us for larger parties."
            )
        return v


class DepositQuery(AvailabilityQuery):
    """Booking details needed to score deposit risk"""

    time: str

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        return validate_time_24h(v)


class OptimizeTablesRequest(BaseModel):
    """Body of a table optimization request"""

    bookings: list[SeatingRequest] = Field(..., min_length=1)
    date: Optional[str] = None

    @field_validator("bookings")
    @classmethod
    def validate_party_sizes(cls, v):
        for booking in v:
            if booking.guests > MAX_OPTIMIZER_PARTY_SIZE:
                raise ValueError(
                    f"Booking {booking.id} has {booking.guests} guests; maximum is {MAX_OPTIMIZER_PARTY_SIZE}"
                )
        return v

    @field_validator("date")
    @classmethod
    def validate_date(cls, v):
        if v is None:
            return v
        return validate_date_string(v)


# ============================================================================
# COERCION HELPERS
# ============================================================================


def describe_validation_error(error: ValidationError) -> str:
    """Flatten the first pydantic error into "field: message" """
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "value"
    return f"{location}: {first.get('msg', 'invalid value')}"


def coerce_model(model_cls, value, label: str):
    """Return value as an instance of model_cls, accepting dicts and ORM rows"""
    if isinstance(value, model_cls):
        return value
    try:
        if isinstance(value, dict):
            return model_cls.model_validate(value)
        return model_cls.model_validate(value, from_attributes=True)
    except ValidationError as e:
        logger.warning(f"⚠️ Rejected {label}: {describe_validation_error(e)}")
        raise InvalidArgument(f"Invalid {label}: {describe_validation_error(e)}") from e


def coerce_models(model_cls, values, label: str) -> list:
    """Coerce an iterable of records; None is treated as an empty list"""
    if values is None:
        return []
    return [coerce_model(model_cls, value, f"{label}[{index}]") for index, value in enumerate(values)]
