"""
Utility package initialization and exports
"""

from .date_utils import (
    now_utc,
    today_utc,
    daterange,
    nights_between,
    validate_stay_range,
    stay_nights,
)
from .reference import generate_booking_reference, generate_refund_reference

__all__ = [
    "now_utc",
    "today_utc",
    "daterange",
    "nights_between",
    "validate_stay_range",
    "stay_nights",
    "generate_booking_reference",
    "generate_refund_reference",
]
