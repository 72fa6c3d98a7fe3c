"""
Refund request repository.
"""

from decimal import Decimal
from typing import List
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import handle_database_exception
from app.models.base.enums import RefundStatus
from app.models.payment.refund import RefundRequest
from app.repositories.base.base_repository import BaseRepository


class RefundRepository(BaseRepository[RefundRequest]):

    def __init__(self, db: Session):
        super().__init__(RefundRequest, db)

    def list_for_booking(self, booking_id: UUID) -> List[RefundRequest]:
        """Refund requests of a booking, newest first."""
        return self.find_by_criteria(
            {"booking_id": booking_id},
            limit=None,
            order_by=["-requested_at"],
        )

    def claimed_amount(self, booking_id: UUID) -> Decimal:
        """Sum of pending and approved refund amounts for a booking."""
        stmt = select(func.coalesce(func.sum(RefundRequest.refund_amount), 0)).where(
            RefundRequest.booking_id == booking_id,
            RefundRequest.status.in_([RefundStatus.PENDING, RefundStatus.APPROVED]),
        )
        try:
            return Decimal(str(self.db.execute(stmt).scalar_one()))
        except SQLAlchemyError as e:
            raise handle_database_exception(e, "sum refund amounts") from e
