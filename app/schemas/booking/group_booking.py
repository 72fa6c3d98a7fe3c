# --- File: app/schemas/booking/group_booking.py ---
"""
Group booking request and quote schemas.
"""

from __future__ import annotations

from datetime import date as Date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field

from app.models.base.enums import GroupBookingCategory, GroupBookingStatus
from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = [
    "GroupQuoteRequest",
    "GroupBookingCreate",
    "GroupBookingStatusUpdate",
    "AdditionalServices",
    "GroupQuote",
    "GroupBookingResponse",
]


class GroupQuoteRequest(BaseSchema):
    """Parameters of an advisory group quote."""

    hotel_id: UUID
    group_size: int = Field(..., ge=1, le=10000)
    category: GroupBookingCategory
    check_in_date: Date
    check_out_date: Date
    rooms_required: int = Field(..., ge=1, le=5000)


class GroupBookingCreate(BaseCreateSchema):
    hotel_id: UUID
    group_name: str = Field(..., min_length=2, max_length=255)
    group_size: int = Field(..., ge=1, le=10000)
    category: GroupBookingCategory
    check_in_date: Date
    check_out_date: Date
    rooms_required: int = Field(..., ge=1, le=5000)
    estimated_budget: Optional[Decimal] = Field(None, ge=0)
    special_requirements: Optional[str] = Field(None, max_length=4000)


class GroupBookingStatusUpdate(BaseSchema):
    status: GroupBookingStatus
    admin_notes: Optional[str] = Field(None, max_length=4000)


class AdditionalServices(BaseSchema):
    """
    Flat estimate line items; catering is a single flat amount, not per person.
    """

    meeting_room: Decimal
    catering_per_person: Decimal
    decorations: Decimal
    transportation: Decimal

    @property
    def total(self) -> Decimal:
        return self.meeting_room + self.catering_per_person + self.decorations + self.transportation


class GroupQuote(BaseSchema):
    hotel_id: UUID
    hotel_name: str
    group_size: int
    category: GroupBookingCategory
    nights: int
    rooms_required: int
    base_price: Decimal
    discount_rate: Decimal = Field(..., description="Fraction of base price, e.g. 0.15")
    discount_percent: int = Field(..., description="Rounded percentage, e.g. 15")
    discount_amount: Decimal
    rooms_total: Decimal
    additional_services: AdditionalServices
    total_additional_services: Decimal
    grand_total: Decimal
    valid_until: datetime


class GroupBookingResponse(BaseResponseSchema):
    hotel_id: UUID
    organizer_id: str
    group_name: str
    group_size: int
    category: GroupBookingCategory
    check_in_date: Date
    check_out_date: Date
    rooms_required: int
    estimated_budget: Optional[Decimal] = None
    special_requirements: Optional[str] = None
    status: GroupBookingStatus
    admin_notes: Optional[str] = None
