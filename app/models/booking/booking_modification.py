"""
Booking modification models.

Every field-level change to a booking (dates, guests, rooms) and every
cancellation is recorded here with before/after snapshots.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

from sqlalchemy import (
    JSON,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.enums import ModificationStatus, ModificationType
from app.models.base.mixins import UUIDMixin

if TYPE_CHECKING:
    from app.models.booking.booking import Booking

__all__ = [
    "BookingModification",
]


class BookingModification(UUIDMixin, TimestampModel):
    """
    Append-only record of a change applied to a booking.

    Attributes:
        booking_id: Reference to the booking
        modification_type: date_change, guest_count, room_count or cancellation
        old_data: Snapshot of the affected fields before the change
        new_data: Snapshot of the affected fields after the change
        reason: Reason supplied by the requester
        status: Approval status (changes are applied immediately and approved)
        requested_by: Who requested the change
        processed_at: When the change was applied
    """

    __tablename__ = "booking_modifications"

    booking_id: Mapped[UUID] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Reference to booking",
    )

    modification_type: Mapped[ModificationType] = mapped_column(
        SQLEnum(ModificationType),
        nullable=False,
        comment="Kind of change",
    )

    old_data: Mapped[Dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Values before the change",
    )

    new_data: Mapped[Dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Values after the change",
    )

    reason: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    status: Mapped[ModificationStatus] = mapped_column(
        SQLEnum(ModificationStatus),
        nullable=False,
        default=ModificationStatus.APPROVED,
        comment="Approval status",
    )

    requested_by: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
    )

    processed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    booking: Mapped["Booking"] = relationship(
        "Booking",
        back_populates="modifications",
    )

    __table_args__ = (
        Index("ix_modification_booking_created", "booking_id", "created_at"),
        {"comment": "Booking modification audit trail"},
    )

    def __repr__(self) -> str:
        return (
            f"<BookingModification(booking_id={self.booking_id}, "
            f"type={self.modification_type}, status={self.status})>"
        )
