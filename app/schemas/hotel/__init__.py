from app.schemas.hotel.inventory import (
    AvailabilityCalendar,
    AvailabilityQuote,
    CalendarDay,
    InventoryDayResponse,
)

__all__ = [
    "AvailabilityCalendar",
    "AvailabilityQuote",
    "CalendarDay",
    "InventoryDayResponse",
]
