# app/utils/date_utils.py
"""
Date and time utility functions used across the booking core.

Notes:
- All "UTC" helpers use timezone-aware datetimes with `timezone.utc`.
- A stay `[check_in, check_out)` occupies every night from check-in up
  to, but not including, the check-out date.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Iterator, List

from app.core.exceptions import InvalidDateRangeError

logger = logging.getLogger(__name__)

UTC = timezone.utc


def now_utc() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def today_utc() -> date:
    """Return today's date in UTC."""
    return now_utc().date()


def daterange(start: date, end: date) -> Iterator[date]:
    """
    Yield all dates from start to end inclusive.
    If start > end, yields nothing.
    """
    if start > end:
        return
    for i in range((end - start).days + 1):
        yield start + timedelta(days=i)


def nights_between(check_in: date, check_out: date) -> int:
    """Number of nights in a stay; zero or negative for an invalid range."""
    return (check_out - check_in).days


def validate_stay_range(check_in: date, check_out: date) -> int:
    """
    Ensure a stay has at least one night and return the night count.

    Raises:
        InvalidDateRangeError: if check_in is not strictly before check_out
    """
    nights = nights_between(check_in, check_out)
    if nights <= 0:
        raise InvalidDateRangeError(
            start_date=check_in.isoformat(),
            end_date=check_out.isoformat(),
        )
    return nights


def stay_nights(check_in: date, check_out: date) -> List[date]:
    """
    Return the nights consumed by a stay, excluding the check-out date.

    Raises:
        InvalidDateRangeError: for zero-night or reversed ranges
    """
    nights = validate_stay_range(check_in, check_out)
    return [check_in + timedelta(days=i) for i in range(nights)]
