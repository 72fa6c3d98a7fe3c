"""
Booking modification repository.
"""

from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.booking.booking_modification import BookingModification
from app.repositories.base.base_repository import BaseRepository


class BookingModificationRepository(BaseRepository[BookingModification]):

    def __init__(self, db: Session):
        super().__init__(BookingModification, db)

    def list_for_booking(self, booking_id: UUID) -> List[BookingModification]:
        """Modifications of a booking, newest first."""
        return self.find_by_criteria(
            {"booking_id": booking_id},
            limit=None,
            order_by=["-created_at"],
        )
