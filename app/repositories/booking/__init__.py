"""
Booking repositories.
"""

from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.booking.booking_modification_repository import BookingModificationRepository
from app.repositories.booking.group_booking_repository import GroupBookingRepository

__all__ = [
    "BookingRepository",
    "BookingModificationRepository",
    "GroupBookingRepository",
]
