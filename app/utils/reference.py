"""
Human-shareable reference codes for bookings and refunds.
"""

import secrets
import string
from datetime import datetime
from typing import Optional

from app.utils.date_utils import now_utc

_ALPHABET = string.ascii_uppercase + string.digits


def _random_suffix(length: int) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_booking_reference(prefix: str = "BK", at: Optional[datetime] = None) -> str:
    """
    Generate a booking reference.

    Format: prefix + YYYYMMDD + 6 random alphanumerics (e.g. BK20250601X7K2QA).
    """
    stamp = (at or now_utc()).strftime("%Y%m%d")
    return f"{prefix}{stamp}{_random_suffix(6)}"


def generate_refund_reference(prefix: str = "REF", at: Optional[datetime] = None) -> str:
    """
    Generate a refund reference of the form PREFIX_<epoch millis>_<random>.
    """
    millis = int((at or now_utc()).timestamp() * 1000)
    return f"{prefix}_{millis}_{_random_suffix(9)}"
