"""
Database models package.

Importing this package registers every mapped class on ``Base.metadata``.
"""

from app.models.base import Base
from app.models.hotel import Hotel, InventoryDay
from app.models.booking import (
    Booking,
    BookingModification,
    BookingStatusHistory,
    GroupBookingRequest,
)
from app.models.payment import RefundRequest

__all__ = [
    "Base",
    "Hotel",
    "InventoryDay",
    "Booking",
    "BookingModification",
    "BookingStatusHistory",
    "GroupBookingRequest",
    "RefundRequest",
]
