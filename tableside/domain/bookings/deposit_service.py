"""
No-show deposit heuristic.

High-demand bookings are asked for a refundable deposit:
- Weekend (Friday/Saturday) prime-time starts (18:00 - 21:59 by default)
- Large parties (6+ guests by default), which take the larger amount

The result is advisory; the booking flow decides whether to hold the
booking until the deposit is paid.
"""

import logging

from ...config import (
    DEPOSIT_LARGE_PARTY_AMOUNT,
    DEPOSIT_LARGE_PARTY_THRESHOLD,
    DEPOSIT_PRIME_END_HOUR,
    DEPOSIT_PRIME_START_HOUR,
    DEPOSIT_WEEKEND_PRIME_AMOUNT,
)
from ...shared.validators import parse_date, validate_positive_int, validate_time_24h
from .schemas import DepositRisk

logger = logging.getLogger(__name__)

# date.weekday() values for Friday and Saturday
WEEKEND_DAYS = (4, 5)

REASON_WEEKEND_PRIME_TIME = "weekend_prime_time"
REASON_LARGE_PARTY = "large_party"


def assess_deposit_risk(date, time: str, guests: int) -> DepositRisk:
    """Score a prospective booking. Pure function of its three inputs."""
    day = parse_date(date)
    hour = int(validate_time_24h(time).split(":")[0])
    validate_positive_int(guests, "guests")

    is_weekend = day.weekday() in WEEKEND_DAYS
    is_prime_time = DEPOSIT_PRIME_START_HOUR <= hour <= DEPOSIT_PRIME_END_HOUR
    is_large_party = guests >= DEPOSIT_LARGE_PARTY_THRESHOLD

    reasons = []
    amount = 0.0
    if is_weekend and is_prime_time:
        reasons.append(REASON_WEEKEND_PRIME_TIME)
        amount = DEPOSIT_WEEKEND_PRIME_AMOUNT
    if is_large_party:
        reasons.append(REASON_LARGE_PARTY)
        amount = DEPOSIT_LARGE_PARTY_AMOUNT

    if reasons:
        logger.debug(f"Deposit of {amount} suggested for {day.isoformat()} {time}, {guests} guests: {reasons}")

    return DepositRisk(required=bool(reasons), amount=amount, reasons=reasons)
