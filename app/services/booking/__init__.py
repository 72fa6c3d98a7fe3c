"""
Booking services: availability, pricing, lifecycle, modifications and
group requests.
"""

from app.services.booking.availability_service import AvailabilityService
from app.services.booking.booking_pricing_service import BookingPricingService
from app.services.booking.booking_service import BookingService
from app.services.booking.booking_modification_service import BookingModificationService
from app.services.booking.group_discount_service import GroupBookingService, calculate_group_quote

__all__ = [
    "AvailabilityService",
    "BookingPricingService",
    "BookingService",
    "BookingModificationService",
    "GroupBookingService",
    "calculate_group_quote",
]
