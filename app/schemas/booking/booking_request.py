# --- File: app/schemas/booking/booking_request.py ---
"""
Booking request schemas for initiating bookings.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from app.schemas.common.base import BaseCreateSchema, BaseSchema

__all__ = [
    "GuestInformation",
    "BookingCreate",
]


class GuestInformation(BaseSchema):
    """
    Contact details of the primary guest.
    """

    guest_name: str = Field(
        ...,
        min_length=2,
        max_length=255,
        description="Full name of the guest",
    )
    guest_email: EmailStr = Field(
        ...,
        description="Email address for booking confirmations",
    )
    guest_phone: Optional[str] = Field(
        None,
        max_length=20,
        description="Contact phone number (with optional country code)",
    )
    special_requests: Optional[str] = Field(
        None,
        max_length=2000,
        description="Free-form requests for the hotel",
    )

    @field_validator("guest_name")
    @classmethod
    def validate_guest_name(cls, v: str) -> str:
        """Validate and clean guest name."""
        v = " ".join(v.split())
        if len(v) < 2:
            raise ValueError("Guest name must be at least 2 characters long")
        return v

    @field_validator("guest_phone")
    @classmethod
    def validate_phone_number(cls, v: Optional[str]) -> Optional[str]:
        """Validate and normalize phone number."""
        if v is None:
            return v

        # Remove common formatting characters
        v = v.replace(" ", "").replace("-", "").replace("(", "").replace(")", "")
        digits = v[1:] if v.startswith("+") else v
        if not digits.isdigit() or not 7 <= len(digits) <= 15:
            raise ValueError("Phone number must contain 7-15 digits")
        return v


class BookingCreate(BaseCreateSchema):
    """
    Request to book ``rooms`` rooms at a hotel for ``[check_in_date, check_out_date)``.

    Date ordering is checked by the booking service so that a reversed or
    empty range is reported as an invalid date range.
    """

    hotel_id: UUID = Field(..., description="Hotel to book")
    check_in_date: Date = Field(..., description="First night of the stay")
    check_out_date: Date = Field(..., description="Departure date")
    guests: int = Field(..., ge=1, le=100, description="Number of guests")
    rooms: int = Field(1, ge=1, le=500, description="Number of rooms")
    guest: GuestInformation
    idempotency_key: Optional[str] = Field(
        None,
        min_length=1,
        max_length=128,
        description="Client key; retrying with the same key returns the original booking",
    )
