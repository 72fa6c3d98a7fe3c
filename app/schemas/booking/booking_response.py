# --- File: app/schemas/booking/booking_response.py ---
"""
Booking response schemas.
"""

from __future__ import annotations

from datetime import date as Date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from app.models.base.enums import BookingStatus, PaymentStatus
from app.schemas.common.base import BaseResponseSchema, BaseSchema

__all__ = [
    "StatusHistoryItem",
    "BookingResponse",
    "BookingDetail",
]


class StatusHistoryItem(BaseSchema):
    from_status: Optional[BookingStatus] = None
    to_status: BookingStatus
    changed_by: Optional[str] = None
    change_reason: Optional[str] = None
    changed_at: datetime


class BookingResponse(BaseResponseSchema):
    """
    Booking as returned by the lifecycle operations.
    """

    booking_reference: str
    hotel_id: UUID
    user_id: str
    check_in_date: Date
    check_out_date: Date
    nights: int
    guests: int
    rooms: int
    total_amount: Decimal = Field(..., ge=0)
    booking_status: BookingStatus
    payment_status: PaymentStatus
    guest_name: str
    guest_email: str
    guest_phone: Optional[str] = None
    special_requests: Optional[str] = None
    confirmed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    completed_at: Optional[datetime] = None


class BookingDetail(BookingResponse):
    """Booking with its status audit trail."""

    status_history: List[StatusHistoryItem] = Field(default_factory=list)
