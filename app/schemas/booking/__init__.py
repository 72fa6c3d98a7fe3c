"""
Booking schemas package.
"""

from app.schemas.booking.booking_request import BookingCreate, GuestInformation
from app.schemas.booking.booking_response import BookingDetail, BookingResponse, StatusHistoryItem
from app.schemas.booking.booking_modification import ModificationRequest, ModificationResponse
from app.schemas.booking.group_booking import (
    AdditionalServices,
    GroupBookingCreate,
    GroupBookingResponse,
    GroupBookingStatusUpdate,
    GroupQuote,
    GroupQuoteRequest,
)

__all__ = [
    "BookingCreate",
    "GuestInformation",
    "BookingDetail",
    "BookingResponse",
    "StatusHistoryItem",
    "ModificationRequest",
    "ModificationResponse",
    "AdditionalServices",
    "GroupBookingCreate",
    "GroupBookingResponse",
    "GroupBookingStatusUpdate",
    "GroupQuote",
    "GroupQuoteRequest",
]
