"""
Test data builders shared by the test modules.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from app.core.events import EventBus, EventTypes
from app.models.hotel.hotel import Hotel
from app.schemas.booking.booking_request import BookingCreate

JUNE_1 = date(2025, 6, 1)
JUNE_2 = date(2025, 6, 2)
JUNE_3 = date(2025, 6, 3)
JUNE_4 = date(2025, 6, 4)
JUNE_5 = date(2025, 6, 5)

USER = "user-1"
OTHER_USER = "user-2"

ALL_EVENT_TYPES = [
    value for name, value in vars(EventTypes).items() if name.isupper()
]


class EventRecorder:
    def __init__(self, bus: EventBus):
        self.events = []
        for event_type in ALL_EVENT_TYPES:
            bus.subscribe(event_type, self.events.append)

    def types(self):
        return [e.event_type for e in self.events]

    def of_type(self, event_type):
        return [e for e in self.events if e.event_type == event_type]


def make_hotel(session, name="Seaside Inn", price="1000.00", is_active=True, city="Goa"):
    hotel = Hotel(name=name, city=city, price_per_night=Decimal(price), is_active=is_active)
    session.add(hotel)
    session.commit()
    return hotel


def booking_request(hotel_id, check_in=JUNE_1, check_out=JUNE_3, rooms=1, guests=2, **overrides):
    data = {
        "hotel_id": hotel_id,
        "check_in_date": check_in,
        "check_out_date": check_out,
        "guests": guests,
        "rooms": rooms,
        "guest": {
            "guest_name": "Asha Rao",
            "guest_email": "asha.rao@guestmail.in",
            "guest_phone": "+91 98765 43210",
        },
    }
    data.update(overrides)
    return BookingCreate.model_validate(data)
