# app/services/booking/booking_pricing_service.py
"""
Booking pricing service for date-sensitive stay pricing.

A night costs ``base_price`` (or the hotel's static rate when the ledger
has no override) times that night's surge multiplier. Stays are priced
night by night so a single surge night only affects itself.

Amounts carry full Decimal precision; rounding is left to presentation.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.exceptions import HotelNotFoundError, ValidationError
from app.models.hotel.hotel import Hotel
from app.models.hotel.inventory import InventoryDay
from app.repositories.hotel.hotel_repository import HotelRepository
from app.services.inventory.inventory_ledger import InventoryLedger


class BookingPricingService:
    """
    Service for booking pricing calculations.

    Responsibilities:
    - Price a single night from the ledger and the hotel rate
    - Price a stay as the sum of its nights times rooms
    - Generate per-night pricing breakdowns
    """

    def __init__(self, session: Session, ledger: Optional[InventoryLedger] = None):
        """Initialize pricing service."""
        self.session = session
        self.ledger = ledger or InventoryLedger(session)
        self.hotels = HotelRepository(session)

    # ==================== PRICE CALCULATION ====================

    def nightly_price(self, hotel_id: UUID, night: date) -> Decimal:
        """
        Price of one room for one night.

        Raises:
            HotelNotFoundError: if the hotel does not exist
        """
        hotel = self._get_hotel(hotel_id)
        return self._price_for_day(hotel, self.ledger.get_day(hotel_id, night))

    def total_price(self, hotel_id: UUID, check_in: date, check_out: date, rooms: int) -> Decimal:
        """
        Sum of ``nightly_price(night) * rooms`` over ``[check_in, check_out)``.

        Raises:
            InvalidDateRangeError: if check_in is not before check_out
            ValidationError: if rooms < 1
            HotelNotFoundError: if the hotel does not exist
        """
        return sum(
            (line["amount"] for line in self.breakdown(hotel_id, check_in, check_out, rooms)),
            Decimal("0"),
        )

    def breakdown(
        self,
        hotel_id: UUID,
        check_in: date,
        check_out: date,
        rooms: int,
    ) -> List[Dict]:
        """
        Per-night pricing lines for a stay.

        Each line carries the night, the unit price before surge, the
        surge multiplier, the nightly price and the amount for all rooms.
        """
        if rooms is None or rooms < 1:
            raise ValidationError("Room count must be at least 1", {"rooms": ["must be >= 1"]})

        hotel = self._get_hotel(hotel_id)
        lines = []
        for day in self.ledger.get_stay_days(hotel_id, check_in, check_out):
            unit = self._unit_price(hotel, day)
            nightly = unit * Decimal(day.surge_multiplier)
            lines.append(
                {
                    "date": day.date,
                    "unit_price": unit,
                    "surge_multiplier": Decimal(day.surge_multiplier),
                    "nightly_price": nightly,
                    "rooms": rooms,
                    "amount": nightly * rooms,
                }
            )
        return lines

    # ==================== HELPERS ====================

    def _get_hotel(self, hotel_id: UUID) -> Hotel:
        hotel = self.hotels.find_by_id(hotel_id)
        if hotel is None:
            raise HotelNotFoundError(hotel_id)
        return hotel

    @staticmethod
    def _unit_price(hotel: Hotel, day: InventoryDay) -> Decimal:
        if day.base_price is not None:
            return Decimal(day.base_price)
        return Decimal(hotel.price_per_night)

    def _price_for_day(self, hotel: Hotel, day: InventoryDay) -> Decimal:
        return self._unit_price(hotel, day) * Decimal(day.surge_multiplier)
