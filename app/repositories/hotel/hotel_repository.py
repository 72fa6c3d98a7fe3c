"""
Hotel repository: read-only catalog lookups used by the booking core.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.hotel.hotel import Hotel
from app.repositories.base.base_repository import BaseRepository


class HotelRepository(BaseRepository[Hotel]):

    def __init__(self, db: Session):
        super().__init__(Hotel, db)

    def find_active_by_id(self, hotel_id: UUID) -> Optional[Hotel]:
        hotel = self.find_by_id(hotel_id)
        if hotel is None or not hotel.is_active:
            return None
        return hotel

    def list_active(self, city: Optional[str] = None) -> List[Hotel]:
        return self.find_by_criteria(
            {"is_active": True, "city": city},
            limit=None,
            order_by=["name"],
        )
