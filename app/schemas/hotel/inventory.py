"""
Inventory, availability and calendar schemas.
"""

from __future__ import annotations

from datetime import date as Date
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from app.schemas.common.base import BaseSchema

__all__ = [
    "InventoryDayResponse",
    "AvailabilityQuote",
    "CalendarDay",
    "AvailabilityCalendar",
]


class InventoryDayResponse(BaseSchema):
    """One night of a hotel's inventory, stored or default."""

    hotel_id: UUID
    date: Date
    max_rooms: int = Field(..., ge=0)
    available_rooms: int = Field(..., ge=0)
    base_price: Optional[Decimal] = None
    surge_multiplier: Decimal = Field(..., ge=0)


class AvailabilityQuote(BaseSchema):
    """Dry-run availability check with the live price of the stay."""

    hotel_id: UUID
    check_in: Date
    check_out: Date
    rooms: int
    available: bool
    total_price: Optional[Decimal] = Field(
        None,
        description="Full-precision stay price; None when it cannot be computed",
    )


class CalendarDay(BaseSchema):
    date: Date
    available_rooms: int
    max_rooms: int
    base_price: Decimal = Field(..., description="Per-date price, falling back to the hotel rate")
    surge_multiplier: Decimal
    is_available: bool


class AvailabilityCalendar(BaseSchema):
    hotel_id: UUID
    calendar: List[CalendarDay]
