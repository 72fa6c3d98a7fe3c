# app/repositories/booking/booking_repository.py
"""
Booking repository: lookups scoped to the booking owner and the
inventory-facing aggregate used to verify no night is overbooked.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import handle_database_exception
from app.models.base.enums import BookingStatus
from app.models.booking.booking import ACTIVE_BOOKING_STATUSES, Booking
from app.repositories.base.base_repository import BaseRepository


class BookingRepository(BaseRepository[Booking]):

    def __init__(self, db: Session):
        super().__init__(Booking, db)

    def find_for_user(self, booking_id: UUID, user_id: str) -> Optional[Booking]:
        """Booking by id, only if owned by ``user_id``."""
        booking = self.find_by_id(booking_id)
        if booking is None or booking.user_id != user_id:
            return None
        return booking

    def find_by_reference(self, reference: str) -> Optional[Booking]:
        return self.find_one_by_criteria({"booking_reference": reference})

    def reference_exists(self, reference: str) -> bool:
        return self.exists({"booking_reference": reference})

    def find_by_idempotency_key(self, user_id: str, key: str) -> Optional[Booking]:
        return self.find_one_by_criteria({"user_id": user_id, "idempotency_key": key})

    def list_for_user(
        self,
        user_id: str,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        """Bookings of a user, newest first."""
        return self.find_by_criteria(
            {"user_id": user_id, "booking_status": status},
            limit=None,
            order_by=["-created_at"],
        )

    def committed_rooms_on(self, hotel_id: UUID, night: date) -> int:
        """Rooms held by pending/confirmed bookings whose stay covers ``night``."""
        stmt = select(func.coalesce(func.sum(Booking.rooms), 0)).where(
            Booking.hotel_id == hotel_id,
            Booking.booking_status.in_(list(ACTIVE_BOOKING_STATUSES)),
            Booking.check_in_date <= night,
            Booking.check_out_date > night,
        )
        try:
            return int(self.db.execute(stmt).scalar_one())
        except SQLAlchemyError as e:
            raise handle_database_exception(e, "sum committed rooms") from e
