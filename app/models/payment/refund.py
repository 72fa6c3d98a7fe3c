"""
Refund request model.

Handles refund requests raised against a booking and their approval.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.exceptions import InvalidTransitionError
from app.models.base.base_model import TimestampModel
from app.models.base.enums import RefundStatus
from app.models.base.mixins import UUIDMixin
from app.utils.date_utils import now_utc

if TYPE_CHECKING:
    from app.models.booking.booking import Booking

__all__ = ["RefundRequest"]


class RefundRequest(TimestampModel, UUIDMixin):
    """
    Refund request for a booking.

    ``request_reference`` identifies the request from the moment it is
    raised; ``settlement_reference`` is assigned only when it is approved.
    """

    __tablename__ = "refund_requests"

    # ==================== Foreign Keys ====================
    booking_id: Mapped[UUID] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="Requester",
    )

    # ==================== Refund Details ====================
    refund_amount: Mapped[Decimal] = mapped_column(
        Numeric(18, 6),
        nullable=False,
    )

    refund_reason: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    status: Mapped[RefundStatus] = mapped_column(
        SQLEnum(RefundStatus),
        nullable=False,
        default=RefundStatus.PENDING,
        index=True,
    )

    request_reference: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
    )

    settlement_reference: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
        unique=True,
    )

    # ==================== Timestamps ====================
    requested_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
    )

    processed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    processed_by: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
    )

    booking: Mapped["Booking"] = relationship(
        "Booking",
        back_populates="refund_requests",
    )

    __table_args__ = (
        Index("ix_refund_booking_requested", "booking_id", "requested_at"),
        CheckConstraint("refund_amount > 0", name="ck_refund_amount_positive"),
        {"comment": "Refund requests against bookings"},
    )

    @property
    def is_pending(self) -> bool:
        return self.status == RefundStatus.PENDING

    def approve(self, settlement_reference: str, processed_by: Optional[str] = None) -> None:
        if not self.is_pending:
            raise InvalidTransitionError(self.status, RefundStatus.APPROVED, entity="Refund request")
        self.status = RefundStatus.APPROVED
        self.settlement_reference = settlement_reference
        self.processed_at = now_utc()
        self.processed_by = processed_by

    def reject(self, processed_by: Optional[str] = None) -> None:
        if not self.is_pending:
            raise InvalidTransitionError(self.status, RefundStatus.REJECTED, entity="Refund request")
        self.status = RefundStatus.REJECTED
        self.processed_at = now_utc()
        self.processed_by = processed_by

    def __repr__(self) -> str:
        return (
            f"<RefundRequest(id={self.id}, booking_id={self.booking_id}, "
            f"amount={self.refund_amount}, status={self.status})>"
        )
