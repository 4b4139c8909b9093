"""Table service - greedy best-fit table assignment"""

import logging
from collections import defaultdict

from ...exceptions import InvalidArgument
from .schemas import (
    SeatingRequest,
    Table,
    TableAssignment,
    TableOptimizationResult,
    coerce_models,
)
from .time_calculator import time_to_minutes

logger = logging.getLogger(__name__)


def _ensure_unique_ids(records, label: str) -> None:
    seen = set()
    for record in records:
        if record.id in seen:
            logger.warning(f"⚠️ Duplicate {label} id {record.id!r}")
            raise InvalidArgument(f"Duplicate {label} id: {record.id!r}")
        seen.add(record.id)


def _group_by_slot(requests: list[SeatingRequest]) -> dict[int, list[SeatingRequest]]:
    slots = defaultdict(list)
    for request in requests:
        slots[time_to_minutes(request.time)].append(request)
    return slots


def optimize_tables(bookings, tables) -> TableOptimizationResult:
    """
    Assign bookings to tables, slot by slot.

    Tables are tried smallest first so large tables stay free for large
    parties, and within a slot the largest parties are placed first.
    Bookings that fit no free table are left unassigned and reported in
    unassignedBookingIds for manual review.

    Args:
        bookings: Records with id, guests and time ("HH:mm")
        tables: Records with id, capacity and optional isActive

    Returns:
        TableOptimizationResult with the assignments and the share of
        seats used at the assigned tables

    Raises:
        InvalidArgument: On malformed records or duplicate ids
    """
    requests = coerce_models(SeatingRequest, bookings, "booking")
    all_tables = coerce_models(Table, tables, "table")
    _ensure_unique_ids(requests, "booking")
    _ensure_unique_ids(all_tables, "table")

    # sorted() is stable, so equal capacities keep their input order
    candidates = sorted((t for t in all_tables if t.isActive), key=lambda t: t.capacity)

    assignments = []
    unassigned = []
    seated_guests = 0
    used_capacity = 0

    slots = _group_by_slot(requests)
    for minutes in sorted(slots):
        used = set()
        for request in sorted(slots[minutes], key=lambda r: r.guests, reverse=True):
            match = None
            for index, table in enumerate(candidates):
                if index not in used and table.capacity >= request.guests:
                    match = index
                    break

            if match is None:
                unassigned.append(request.id)
                logger.info(f"🪑 No free table for booking {request.id} ({request.guests} guests at {request.time})")
                continue

            used.add(match)
            table = candidates[match]
            assignments.append(TableAssignment(bookingId=request.id, tableId=table.id))
            seated_guests += request.guests
            used_capacity += table.capacity

    utilization = seated_guests / used_capacity if used_capacity else 0.0

    logger.debug(
        f"Assigned {len(assignments)}/{len(requests)} bookings across {len(slots)} slots, "
        f"utilization {utilization:.2f}"
    )

    return TableOptimizationResult(
        assignments=assignments,
        utilizationRate=utilization,
        unassignedBookingIds=unassigned,
    )


def validate_assignments(assignments, bookings, tables) -> list[TableAssignment]:
    """
    Check externally suggested assignments before they are trusted.

    Every assignment must reference a known booking and an active table that
    seats the party, no booking may appear twice, and no table may be used
    twice in the same slot.

    Raises:
        InvalidArgument: Naming the first assignment that breaks a rule
    """
    suggested = coerce_models(TableAssignment, assignments, "assignment")
    requests = coerce_models(SeatingRequest, bookings, "booking")
    all_tables = coerce_models(Table, tables, "table")
    _ensure_unique_ids(requests, "booking")
    _ensure_unique_ids(all_tables, "table")

    requests_by_id = {r.id: r for r in requests}
    tables_by_id = {t.id: t for t in all_tables}

    assigned_bookings = set()
    tables_in_slot = defaultdict(set)

    for assignment in suggested:
        request = requests_by_id.get(assignment.bookingId)
        if request is None:
            raise InvalidArgument(f"Assignment references unknown booking {assignment.bookingId!r}")

        table = tables_by_id.get(assignment.tableId)
        if table is None or not table.isActive:
            logger.warning(f"⚠️ Suggested table {assignment.tableId!r} is not an active table")
            raise InvalidArgument(f"Assignment references unknown or inactive table {assignment.tableId!r}")

        if assignment.bookingId in assigned_bookings:
            raise InvalidArgument(f"Booking {assignment.bookingId!r} is assigned more than once")

        if table.capacity < request.guests:
            raise InvalidArgument(
                f"Table {table.id!r} seats {table.capacity} but booking {request.id!r} has {request.guests} guests"
            )

        slot = time_to_minutes(request.time)
        if table.id in tables_in_slot[slot]:
            raise InvalidArgument(f"Table {table.id!r} is assigned twice at {request.time}")

        assigned_bookings.add(assignment.bookingId)
        tables_in_slot[slot].add(table.id)

    return suggested
