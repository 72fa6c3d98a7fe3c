"""
Administrative inventory operations.

Thin transactional wrapper over the InventoryLedger for back-office
changes to capacity, surge multipliers and per-date prices.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.events import EventBus
from app.core.exceptions import HotelNotFoundError
from app.models.hotel.inventory import InventoryDay
from app.repositories.hotel.hotel_repository import HotelRepository
from app.schemas.hotel.inventory import InventoryDayResponse
from app.services.base import BaseService, ServiceResult
from app.services.inventory.inventory_ledger import InventoryLedger


class InventoryService(BaseService[InventoryDay, HotelRepository]):
    """
    Back-office inventory maintenance.
    """

    def __init__(
        self,
        db_session: Session,
        ledger: Optional[InventoryLedger] = None,
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__(HotelRepository(db_session), db_session, event_bus)
        self.ledger = ledger or InventoryLedger(db_session)

    def get_day(self, hotel_id: UUID, night: date) -> ServiceResult[InventoryDayResponse]:
        try:
            self._require_hotel(hotel_id)
            day = self.ledger.get_day(hotel_id, night)
            return ServiceResult.success(InventoryDayResponse.model_validate(day))
        except Exception as e:
            return self._handle_exception(e, "get inventory day", hotel_id)

    def update_day(
        self,
        hotel_id: UUID,
        night: date,
        available_rooms: Optional[int] = None,
        surge_multiplier: Optional[Decimal] = None,
        base_price: Optional[Decimal] = None,
    ) -> ServiceResult[InventoryDayResponse]:
        return self._mutate(
            "update inventory day",
            hotel_id,
            night,
            lambda: self.ledger.update_day(
                hotel_id,
                night,
                available_rooms=available_rooms,
                surge_multiplier=surge_multiplier,
                base_price=base_price,
            ),
        )

    def set_surge(self, hotel_id: UUID, night: date, multiplier: Decimal) -> ServiceResult[InventoryDayResponse]:
        return self._mutate(
            "set surge multiplier",
            hotel_id,
            night,
            lambda: self.ledger.set_surge(hotel_id, night, multiplier),
        )

    def set_capacity(self, hotel_id: UUID, night: date, max_rooms: int) -> ServiceResult[InventoryDayResponse]:
        return self._mutate(
            "set capacity",
            hotel_id,
            night,
            lambda: self.ledger.set_capacity(hotel_id, night, max_rooms),
        )

    def set_base_price(
        self,
        hotel_id: UUID,
        night: date,
        base_price: Optional[Decimal],
    ) -> ServiceResult[InventoryDayResponse]:
        return self._mutate(
            "set base price",
            hotel_id,
            night,
            lambda: self.ledger.set_base_price(hotel_id, night, base_price),
        )

    # -------------------------------------------------------------------------

    def _require_hotel(self, hotel_id: UUID):
        hotel = self.repository.find_by_id(hotel_id)
        if hotel is None:
            raise HotelNotFoundError(hotel_id)
        return hotel

    def _mutate(self, operation: str, hotel_id: UUID, night: date, change) -> ServiceResult[InventoryDayResponse]:
        try:
            with self.ledger.locks.hold(hotel_id), self.transaction():
                self._require_hotel(hotel_id)
                day = change()
            self._log_operation(
                operation,
                hotel_id,
                {"hotel_id": str(hotel_id), "night": night.isoformat()},
            )
            return ServiceResult.success(InventoryDayResponse.model_validate(day))
        except Exception as e:
            return self._handle_exception(e, operation, hotel_id, {"night": night.isoformat()})
