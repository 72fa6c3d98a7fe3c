"""
Booking models package.
"""

from app.models.booking.booking import (
    ACTIVE_BOOKING_STATUSES,
    BOOKING_TRANSITIONS,
    Booking,
    BookingStatusHistory,
)
from app.models.booking.booking_modification import BookingModification
from app.models.booking.group_booking import GROUP_BOOKING_TRANSITIONS, GroupBookingRequest

__all__ = [
    "ACTIVE_BOOKING_STATUSES",
    "BOOKING_TRANSITIONS",
    "Booking",
    "BookingStatusHistory",
    "BookingModification",
    "GROUP_BOOKING_TRANSITIONS",
    "GroupBookingRequest",
]
