# app/services/booking/availability_service.py
"""
Availability checks and the availability calendar.

``is_available`` is a dry-run predicate: it reads the ledger and never
reserves, so previews and pricing can call it freely without locking.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.events import EventBus
from app.core.exceptions import BaseAppException, HotelNotFoundError, InvalidDateRangeError
from app.models.hotel.hotel import Hotel
from app.repositories.hotel.hotel_repository import HotelRepository
from app.schemas.hotel.inventory import AvailabilityCalendar, AvailabilityQuote, CalendarDay
from app.services.base import BaseService, ServiceResult
from app.services.booking.booking_pricing_service import BookingPricingService
from app.services.inventory.inventory_ledger import InventoryLedger
from app.utils.date_utils import validate_stay_range


class AvailabilityService(BaseService[Hotel, HotelRepository]):
    """
    Read-only availability queries over the inventory ledger.
    """

    def __init__(
        self,
        db_session: Session,
        ledger: Optional[InventoryLedger] = None,
        pricing: Optional[BookingPricingService] = None,
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__(HotelRepository(db_session), db_session, event_bus)
        self.ledger = ledger or InventoryLedger(db_session)
        self.pricing = pricing or BookingPricingService(db_session, self.ledger)

    def is_available(self, hotel_id: UUID, check_in: date, check_out: date, rooms: int) -> bool:
        """
        True iff the hotel is active and every night of ``[check_in, check_out)``
        has at least ``rooms`` rooms left.

        Raises:
            InvalidDateRangeError: if check_in is not before check_out
        """
        validate_stay_range(check_in, check_out)
        if rooms is None or rooms < 1:
            return False

        if self.repository.find_active_by_id(hotel_id) is None:
            return False

        return all(
            day.available_rooms >= rooms
            for day in self.ledger.get_stay_days(hotel_id, check_in, check_out)
        )

    def check(
        self,
        hotel_id: UUID,
        check_in: date,
        check_out: date,
        rooms: int = 1,
    ) -> ServiceResult[AvailabilityQuote]:
        """
        Availability of a stay together with its live price.

        ``total_price`` is None when the stay cannot be priced.
        """
        try:
            available = self.is_available(hotel_id, check_in, check_out, rooms)
            total_price = None
            try:
                total_price = self.pricing.total_price(hotel_id, check_in, check_out, rooms)
            except BaseAppException as e:
                self._logger.debug(
                    f"Stay could not be priced: {e.message}",
                    extra={"hotel_id": str(hotel_id)},
                )

            return ServiceResult.success(
                AvailabilityQuote(
                    hotel_id=hotel_id,
                    check_in=check_in,
                    check_out=check_out,
                    rooms=rooms,
                    available=available,
                    total_price=total_price,
                )
            )
        except Exception as e:
            return self._handle_exception(e, "check availability", hotel_id)

    def get_calendar(self, hotel_id: UUID, start: date, end: date) -> ServiceResult[AvailabilityCalendar]:
        """
        One entry per date in ``[start, end]``, inclusive of ``end``.
        Dates without a ledger row report the defaults.
        """
        try:
            if start > end:
                raise InvalidDateRangeError(
                    "Calendar start must not be after its end",
                    start_date=start.isoformat(),
                    end_date=end.isoformat(),
                )
            hotel = self.repository.find_by_id(hotel_id)
            if hotel is None:
                raise HotelNotFoundError(hotel_id)

            calendar: List[CalendarDay] = []
            for night, day in self.ledger.get_days(hotel_id, start, end).items():
                calendar.append(
                    CalendarDay(
                        date=night,
                        available_rooms=day.available_rooms,
                        max_rooms=day.max_rooms,
                        base_price=day.base_price if day.base_price is not None else hotel.price_per_night,
                        surge_multiplier=day.surge_multiplier,
                        is_available=day.available_rooms > 0,
                    )
                )
            return ServiceResult.success(AvailabilityCalendar(hotel_id=hotel_id, calendar=calendar))
        except Exception as e:
            return self._handle_exception(e, "get availability calendar", hotel_id)
