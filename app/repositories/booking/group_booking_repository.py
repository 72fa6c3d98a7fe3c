"""
Group booking request repository.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.booking.group_booking import GroupBookingRequest
from app.repositories.base.base_repository import BaseRepository


class GroupBookingRepository(BaseRepository[GroupBookingRequest]):

    def __init__(self, db: Session):
        super().__init__(GroupBookingRequest, db)

    def list_requests(self, organizer_id: Optional[str] = None) -> List[GroupBookingRequest]:
        """All requests (or one organizer's), newest first."""
        return self.find_by_criteria(
            {"organizer_id": organizer_id},
            limit=None,
            order_by=["-created_at"],
        )
