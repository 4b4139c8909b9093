from datetime import date, datetime

import pytest

FRIDAY = date(2026, 10, 16)
SATURDAY = date(2026, 10, 17)
SUNDAY = date(2026, 10, 18)
TUESDAY = date(2026, 10, 20)


@pytest.fixture
def now():
    """A fixed clock well before the test dates"""
    return datetime(2026, 10, 1, 9, 0)


@pytest.fixture
def operating_hours():
    return {
        "monday": {"open": "11:00", "close": "22:00"},
        "tuesday": {"open": "11:00", "close": "22:00"},
        "wednesday": {"open": "11:00", "close": "22:00"},
        "thursday": {"open": "11:00", "close": "22:00"},
        "friday": {"open": "17:00", "close": "22:00"},
        "saturday": {"open": "05:00 PM", "close": "11:00 PM"},
        "sunday": {"open": "11:00", "close": "22:00", "closed": True},
    }


@pytest.fixture
def tables():
    return [
        {"id": "A", "capacity": 2},
        {"id": "B", "capacity": 4},
        {"id": "C", "capacity": 6},
    ]
