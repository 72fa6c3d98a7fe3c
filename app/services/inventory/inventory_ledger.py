"""
Inventory ledger.

The single component allowed to change ``InventoryDay.available_rooms``.
It works inside the caller's session and transaction: it flushes but never
commits, so a booking row and the rooms it holds are committed together.

A stay ``[check_in, check_out)`` consumes every night from check-in up to,
but not including, the check-out date.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.config.settings import Settings, settings as default_settings
from app.core.exceptions import InsufficientInventoryError, ValidationError
from app.core.logging import get_logger
from app.models.hotel.inventory import InventoryDay
from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.hotel.inventory_repository import InventoryRepository
from app.services.inventory.locks import HotelLockRegistry, hotel_locks
from app.utils.date_utils import daterange, stay_nights

logger = get_logger(__name__)

# Decimal places the inventory columns store
SURGE_MULTIPLIER_PLACES = 4
BASE_PRICE_PLACES = 2


class InventoryLedger:
    """
    Per-hotel, per-date room ledger.

    Responsibilities:
    - Materialize default days lazily
    - Reserve and release rooms across a stay, all-or-nothing
    - Administrative capacity, surge and price changes
    """

    def __init__(
        self,
        session: Session,
        config: Optional[Settings] = None,
        locks: Optional[HotelLockRegistry] = None,
    ):
        self.session = session
        self.config = config or default_settings
        self.locks = locks or hotel_locks
        self.repository = InventoryRepository(session)
        self.bookings = BookingRepository(session)

    # ==================== READS ====================

    def default_day(self, hotel_id: UUID, night: date) -> InventoryDay:
        """A transient, unsaved day carrying the default values."""
        max_rooms = self.config.INVENTORY_DEFAULT_MAX_ROOMS
        return InventoryDay(
            hotel_id=hotel_id,
            date=night,
            max_rooms=max_rooms,
            available_rooms=max_rooms,
            base_price=None,
            surge_multiplier=Decimal(str(self.config.INVENTORY_DEFAULT_SURGE_MULTIPLIER)),
        )

    def get_day(self, hotel_id: UUID, night: date) -> InventoryDay:
        """Stored day, or a materialized default that is not persisted."""
        return self.repository.find_day(hotel_id, night) or self.default_day(hotel_id, night)

    def get_days(self, hotel_id: UUID, start: date, end: date) -> Dict[date, InventoryDay]:
        """Days for ``start <= date <= end`` (inclusive), defaults filled in."""
        stored = self.repository.find_days(hotel_id, start, end)
        days = {}
        for night in daterange(start, end):
            days[night] = stored.get(night) or self.default_day(hotel_id, night)
        return days

    def get_stay_days(self, hotel_id: UUID, check_in: date, check_out: date) -> List[InventoryDay]:
        """Days consumed by a stay, in date order."""
        nights = stay_nights(check_in, check_out)
        days = self.get_days(hotel_id, nights[0], nights[-1])
        return [days[night] for night in nights]

    # ==================== RESERVE / RELEASE ====================

    def reserve(self, hotel_id: UUID, check_in: date, check_out: date, rooms: int) -> List[date]:
        """
        Take ``rooms`` on every night of the stay.

        Each night is decremented with a conditional update; if any night
        is short, nights already taken by this call are given back before
        raising, so the ledger is left exactly as it was.

        Raises:
            InvalidDateRangeError: for zero-night or reversed ranges
            ValidationError: if rooms < 1
            InsufficientInventoryError: if any night lacks the rooms
        """
        self._require_rooms(rooms)
        nights = stay_nights(check_in, check_out)

        with self.locks.hold(hotel_id):
            self._materialize(hotel_id, nights)
            taken: List[date] = []
            for night in nights:
                if self.repository.decrement_available(hotel_id, night, rooms):
                    taken.append(night)
                    continue

                for done in taken:
                    self.repository.increment_available(hotel_id, done, rooms)
                day = self.repository.find_day(hotel_id, night)
                available = day.available_rooms if day is not None else 0
                logger.warning(
                    "Inventory reservation refused",
                    extra={
                        "hotel_id": str(hotel_id),
                        "night": night.isoformat(),
                        "requested": rooms,
                        "available": available,
                    },
                )
                raise InsufficientInventoryError(
                    hotel_id=hotel_id,
                    date=night,
                    requested=rooms,
                    available=available,
                )

        logger.debug(
            "Inventory reserved",
            extra={"hotel_id": str(hotel_id), "nights": len(nights), "rooms": rooms},
        )
        return nights

    def release(self, hotel_id: UUID, check_in: date, check_out: date, rooms: int) -> List[date]:
        """
        Give ``rooms`` back on every night of the stay, capped at capacity.
        """
        self._require_rooms(rooms)
        nights = stay_nights(check_in, check_out)

        with self.locks.hold(hotel_id):
            for night in nights:
                # A night without a row is already at full capacity
                self.repository.increment_available(hotel_id, night, rooms)

        logger.debug(
            "Inventory released",
            extra={"hotel_id": str(hotel_id), "nights": len(nights), "rooms": rooms},
        )
        return nights

    # ==================== ADMINISTRATION ====================

    def set_surge(self, hotel_id: UUID, night: date, multiplier: Decimal) -> InventoryDay:
        return self.update_day(hotel_id, night, surge_multiplier=multiplier)

    def set_base_price(self, hotel_id: UUID, night: date, base_price: Optional[Decimal]) -> InventoryDay:
        """Set (or clear, with None) the per-date price override."""
        with self.locks.hold(hotel_id):
            if base_price is not None:
                base_price = Decimal(str(base_price))
                errors = _amount_errors(base_price, BASE_PRICE_PLACES)
                if errors:
                    raise ValidationError("Invalid base price", {"base_price": errors})
            day = self._materialized_day(hotel_id, night)
            day.base_price = base_price
            self.repository.flush()
            return day

    def set_capacity(self, hotel_id: UUID, night: date, max_rooms: int) -> InventoryDay:
        """
        Change a night's capacity, keeping committed rooms committed.

        Raises:
            ValidationError: if max_rooms is negative
            InsufficientInventoryError: if capacity would drop below committed rooms
        """
        if max_rooms is None or max_rooms < 0:
            raise ValidationError("Capacity cannot be negative", {"max_rooms": ["must be >= 0"]})

        with self.locks.hold(hotel_id):
            day = self._materialized_day(hotel_id, night)
            committed = day.max_rooms - day.available_rooms
            if max_rooms < committed:
                raise InsufficientInventoryError(
                    "Capacity cannot drop below rooms already committed",
                    hotel_id=hotel_id,
                    date=night,
                    requested=committed,
                    available=max_rooms,
                )
            day.max_rooms = max_rooms
            day.available_rooms = max_rooms - committed
            self.repository.flush()
            logger.info(
                "Inventory capacity changed",
                extra={"hotel_id": str(hotel_id), "night": night.isoformat(), "max_rooms": max_rooms},
            )
            return day

    def update_day(
        self,
        hotel_id: UUID,
        night: date,
        available_rooms: Optional[int] = None,
        surge_multiplier: Optional[Decimal] = None,
        base_price: Optional[Decimal] = None,
    ) -> InventoryDay:
        """
        Administrative upsert of one night.

        Raises:
            ValidationError: if available_rooms is negative or would hand back rooms
                held by active bookings, or if a multiplier or price is negative
                or carries more decimal places than the column stores
        """
        field_errors: Dict[str, List[str]] = {}
        if surge_multiplier is not None:
            surge_multiplier = Decimal(str(surge_multiplier))
            errors = _amount_errors(surge_multiplier, SURGE_MULTIPLIER_PLACES)
            if errors:
                field_errors["surge_multiplier"] = errors
        if base_price is not None:
            base_price = Decimal(str(base_price))
            errors = _amount_errors(base_price, BASE_PRICE_PLACES)
            if errors:
                field_errors["base_price"] = errors

        with self.locks.hold(hotel_id):
            day = self._materialized_day(hotel_id, night)
            if available_rooms is not None:
                ceiling = day.max_rooms - self.bookings.committed_rooms_on(hotel_id, night)
                if not 0 <= available_rooms <= ceiling:
                    field_errors["available_rooms"] = [f"must be between 0 and {max(ceiling, 0)}"]
            if field_errors:
                raise ValidationError("Invalid inventory update", field_errors)

            if available_rooms is not None:
                day.available_rooms = available_rooms
            if surge_multiplier is not None:
                day.surge_multiplier = surge_multiplier
            if base_price is not None:
                day.base_price = base_price
            self.repository.flush()
            return day

    # ==================== HELPERS ====================

    @staticmethod
    def _require_rooms(rooms: int) -> None:
        if rooms is None or rooms < 1:
            raise ValidationError("Room count must be at least 1", {"rooms": ["must be >= 1"]})

    def _materialize(self, hotel_id: UUID, nights: Iterable[date]) -> None:
        self.repository.insert_missing_days(
            hotel_id,
            nights,
            max_rooms=self.config.INVENTORY_DEFAULT_MAX_ROOMS,
            surge_multiplier=Decimal(str(self.config.INVENTORY_DEFAULT_SURGE_MULTIPLIER)),
        )

    def _materialized_day(self, hotel_id: UUID, night: date) -> InventoryDay:
        self._materialize(hotel_id, [night])
        return self.repository.find_day(hotel_id, night)


def _amount_errors(value: Decimal, places: int) -> List[str]:
    errors = []
    if value < 0:
        errors.append("must be >= 0")
    exponent = value.normalize().as_tuple().exponent
    if isinstance(exponent, int) and exponent < -places:
        errors.append(f"at most {places} decimal places")
    return errors
