"""
Inventory repository.

Row-level access to ``InventoryDay``. The decrement is a conditional
UPDATE (compare-and-swap on ``available_rooms``), so a concurrent writer
can never drive a night below zero even without an in-process lock.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import case, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import handle_database_exception
from app.models.hotel.inventory import InventoryDay
from app.repositories.base.base_repository import BaseRepository


class InventoryRepository(BaseRepository[InventoryDay]):

    def __init__(self, db: Session):
        super().__init__(InventoryDay, db)

    # ==================== Reads ====================

    def find_day(self, hotel_id: UUID, night: date) -> Optional[InventoryDay]:
        stmt = select(InventoryDay).where(
            InventoryDay.hotel_id == hotel_id,
            InventoryDay.date == night,
        )
        try:
            return self.db.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise handle_database_exception(e, "find inventory day") from e

    def find_days(self, hotel_id: UUID, start: date, end: date) -> Dict[date, InventoryDay]:
        """Stored rows for ``start <= date <= end`` keyed by date."""
        stmt = (
            select(InventoryDay)
            .where(
                InventoryDay.hotel_id == hotel_id,
                InventoryDay.date >= start,
                InventoryDay.date <= end,
            )
            .order_by(InventoryDay.date)
        )
        try:
            return {row.date: row for row in self.db.execute(stmt).scalars().all()}
        except SQLAlchemyError as e:
            raise handle_database_exception(e, "find inventory days") from e

    # ==================== Writes ====================

    def insert_missing_days(
        self,
        hotel_id: UUID,
        nights: Iterable[date],
        max_rooms: int,
        surge_multiplier: Decimal,
    ) -> List[InventoryDay]:
        """
        Materialize default rows for nights that have none yet.

        Returns the newly inserted rows.
        """
        nights = sorted(set(nights))
        if not nights:
            return []
        existing = self.find_days(hotel_id, nights[0], nights[-1])
        created = []
        for night in nights:
            if night in existing:
                continue
            row = InventoryDay(
                hotel_id=hotel_id,
                date=night,
                max_rooms=max_rooms,
                available_rooms=max_rooms,
                base_price=None,
                surge_multiplier=surge_multiplier,
            )
            self.db.add(row)
            created.append(row)
        if created:
            self.flush()
        return created

    def decrement_available(self, hotel_id: UUID, night: date, rooms: int) -> bool:
        """
        Take ``rooms`` from a night only if that many are still available.

        Returns False when the row is missing or short of rooms.
        """
        stmt = (
            update(InventoryDay)
            .where(
                InventoryDay.hotel_id == hotel_id,
                InventoryDay.date == night,
                InventoryDay.available_rooms >= rooms,
            )
            .values(available_rooms=InventoryDay.available_rooms - rooms)
            .execution_options(synchronize_session="fetch")
        )
        try:
            return self.db.execute(stmt).rowcount == 1
        except SQLAlchemyError as e:
            raise handle_database_exception(e, "reserve inventory") from e

    def increment_available(self, hotel_id: UUID, night: date, rooms: int) -> bool:
        """Give ``rooms`` back to a night, never exceeding ``max_rooms``."""
        stmt = (
            update(InventoryDay)
            .where(
                InventoryDay.hotel_id == hotel_id,
                InventoryDay.date == night,
            )
            .values(
                available_rooms=case(
                    (
                        InventoryDay.available_rooms + rooms > InventoryDay.max_rooms,
                        InventoryDay.max_rooms,
                    ),
                    else_=InventoryDay.available_rooms + rooms,
                )
            )
            .execution_options(synchronize_session="fetch")
        )
        try:
            return self.db.execute(stmt).rowcount == 1
        except SQLAlchemyError as e:
            raise handle_database_exception(e, "release inventory") from e
