# --- File: app/schemas/booking/booking_modification.py ---
"""
Booking modification schemas.
"""

from __future__ import annotations

from datetime import date as Date, datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import Field, model_validator

from app.models.base.enums import ModificationStatus, ModificationType
from app.schemas.common.base import BaseResponseSchema, BaseSchema

__all__ = [
    "ModificationRequest",
    "ModificationResponse",
]


class ModificationRequest(BaseSchema):
    """
    Request to change dates, guest count or room count of a booking.
    """

    modification_type: ModificationType
    new_check_in_date: Optional[Date] = None
    new_check_out_date: Optional[Date] = None
    new_guests: Optional[int] = Field(None, ge=1, le=100)
    new_rooms: Optional[int] = Field(None, ge=1, le=500)
    reason: Optional[str] = Field(None, max_length=1000)

    @model_validator(mode="after")
    def validate_values_for_type(self) -> "ModificationRequest":
        """Ensure the values required by the modification type are present."""
        if self.modification_type == ModificationType.CANCELLATION:
            raise ValueError("Use booking cancellation to cancel a booking")

        if self.modification_type == ModificationType.DATE_CHANGE:
            if self.new_check_in_date is None or self.new_check_out_date is None:
                raise ValueError("date_change requires new_check_in_date and new_check_out_date")
        elif self.modification_type == ModificationType.GUEST_COUNT:
            if self.new_guests is None:
                raise ValueError("guest_count requires new_guests")
        elif self.modification_type == ModificationType.ROOM_COUNT:
            if self.new_rooms is None:
                raise ValueError("room_count requires new_rooms")

        return self


class ModificationResponse(BaseResponseSchema):
    booking_id: UUID
    modification_type: ModificationType
    old_data: Dict[str, Any]
    new_data: Dict[str, Any]
    reason: Optional[str] = None
    status: ModificationStatus
    requested_by: Optional[str] = None
    processed_at: Optional[datetime] = None
