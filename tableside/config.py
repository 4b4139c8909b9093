import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Slot generation
BOOKING_SLOT_INTERVAL_MINUTES = int(os.getenv("BOOKING_SLOT_INTERVAL_MINUTES", "30"))
# Minimum seating time that must fit before closing; 0 allows slots right up to close
BOOKING_SERVICE_DURATION_MINUTES = int(os.getenv("BOOKING_SERVICE_DURATION_MINUTES", "120"))
# Per-slot guest ceiling used when a restaurant has no tables configured
BOOKING_DEFAULT_SLOT_CEILING = int(os.getenv("BOOKING_DEFAULT_SLOT_CEILING", "20"))
# Hours used for a weekday that has no operating hours configured
BOOKING_DEFAULT_OPEN_TIME = os.getenv("BOOKING_DEFAULT_OPEN_TIME", "11:00")
BOOKING_DEFAULT_CLOSE_TIME = os.getenv("BOOKING_DEFAULT_CLOSE_TIME", "22:00")
# Largest party accepted through the public booking flow
BOOKING_MAX_GUESTS = int(os.getenv("BOOKING_MAX_GUESTS", "20"))
# Default length of a booking when the record carries no duration (minutes)
BOOKING_DEFAULT_DURATION_MINUTES = int(os.getenv("BOOKING_DEFAULT_DURATION_MINUTES", "120"))

# No-show deposit heuristic
DEPOSIT_WEEKEND_PRIME_AMOUNT = float(os.getenv("DEPOSIT_WEEKEND_PRIME_AMOUNT", "25"))
DEPOSIT_LARGE_PARTY_AMOUNT = float(os.getenv("DEPOSIT_LARGE_PARTY_AMOUNT", "50"))
DEPOSIT_LARGE_PARTY_THRESHOLD = int(os.getenv("DEPOSIT_LARGE_PARTY_THRESHOLD", "6"))
DEPOSIT_PRIME_START_HOUR = int(os.getenv("DEPOSIT_PRIME_START_HOUR", "18"))
DEPOSIT_PRIME_END_HOUR = int(os.getenv("DEPOSIT_PRIME_END_HOUR", "21"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Apply the shared log format. Called by the host application, never on import."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
