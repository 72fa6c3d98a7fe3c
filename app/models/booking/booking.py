"""
Booking models for managing hotel reservations.

This module defines the booking entity with its status state machine and
the append-only status history that audits every transition.
"""

from datetime import date as Date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, FrozenSet, List, Optional
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    Date as SQLDate,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.core.exceptions import InvalidTransitionError
from app.models.base.base_model import TimestampModel
from app.models.base.enums import BookingStatus, PaymentOutcome, PaymentStatus
from app.models.base.mixins import GuestContactMixin, UUIDMixin
from app.utils.date_utils import now_utc

if TYPE_CHECKING:
    from app.models.booking.booking_modification import BookingModification
    from app.models.hotel.hotel import Hotel
    from app.models.payment.refund import RefundRequest

__all__ = [
    "Booking",
    "BookingStatusHistory",
    "BOOKING_TRANSITIONS",
    "ACTIVE_BOOKING_STATUSES",
]


BOOKING_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}

# Statuses that hold inventory
ACTIVE_BOOKING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})


class Booking(UUIDMixin, TimestampModel, GuestContactMixin):
    """
    Hotel reservation for a date range and a number of rooms.

    The stay covers the nights in ``[check_in_date, check_out_date)``.
    ``total_amount`` is fixed at creation; modifications never rewrite it.

    Attributes:
        booking_reference: Unique human-readable booking reference
        idempotency_key: Optional client key making creation retry-safe
        hotel_id: Hotel being booked
        user_id: Opaque id of the booking owner
        check_in_date: First night of the stay
        check_out_date: Departure date (not a consumed night)
        guests: Number of guests
        rooms: Number of rooms held
        total_amount: Price fixed at creation time
        booking_status: Lifecycle status
        payment_status: Payment status, independent of booking_status
    """

    __tablename__ = "bookings"

    booking_reference: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
        comment="Unique human-readable booking reference (e.g., BK20250601X7K2QA)",
    )

    idempotency_key: Mapped[Optional[str]] = mapped_column(
        String(128),
        nullable=True,
        comment="Client supplied key for retry-safe creation",
    )

    hotel_id: Mapped[UUID] = mapped_column(
        ForeignKey("hotels.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="Hotel being booked",
    )

    user_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="Owner of the booking",
    )

    check_in_date: Mapped[Date] = mapped_column(
        SQLDate,
        nullable=False,
        comment="Check-in date",
    )

    check_out_date: Mapped[Date] = mapped_column(
        SQLDate,
        nullable=False,
        comment="Check-out date",
    )

    guests: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment="Number of guests",
    )

    rooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment="Number of rooms",
    )

    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(18, 6),
        nullable=False,
        comment="Total price fixed at creation",
    )

    booking_status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
        comment="Booking lifecycle status",
    )

    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus),
        nullable=False,
        default=PaymentStatus.PENDING,
        index=True,
        comment="Payment status",
    )

    confirmed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    cancelled_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    cancellation_reason: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Relationships
    hotel: Mapped["Hotel"] = relationship(
        "Hotel",
        lazy="select",
    )

    status_history: Mapped[List["BookingStatusHistory"]] = relationship(
        "BookingStatusHistory",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingStatusHistory.changed_at",
        lazy="select",
    )

    modifications: Mapped[List["BookingModification"]] = relationship(
        "BookingModification",
        back_populates="booking",
        cascade="all, delete-orphan",
        lazy="select",
    )

    refund_requests: Mapped[List["RefundRequest"]] = relationship(
        "RefundRequest",
        back_populates="booking",
        lazy="select",
    )

    # Table Configuration
    __table_args__ = (
        Index("ix_booking_hotel_status", "hotel_id", "booking_status"),
        Index("ix_booking_user_status", "user_id", "booking_status"),
        Index("ix_booking_hotel_dates", "hotel_id", "check_in_date", "check_out_date"),

        CheckConstraint(
            "check_in_date < check_out_date",
            name="ck_booking_dates_ordered",
        ),
        CheckConstraint("guests >= 1", name="ck_booking_guests_positive"),
        CheckConstraint("rooms >= 1", name="ck_booking_rooms_positive"),
        CheckConstraint("total_amount >= 0", name="ck_booking_total_positive"),

        UniqueConstraint("booking_reference", name="uq_booking_reference"),
        UniqueConstraint("user_id", "idempotency_key", name="uq_booking_user_idempotency"),

        {"comment": "Hotel reservations"},
    )

    # Validators
    @validates("guests", "rooms")
    def validate_counts(self, key: str, value: int) -> int:
        if value is None or value < 1:
            raise ValueError(f"{key} must be at least 1")
        return value

    @validates("total_amount")
    def validate_amount(self, key: str, value: Decimal) -> Decimal:
        """Validate monetary amounts are non-negative."""
        if value < 0:
            raise ValueError(f"{key} cannot be negative")
        return value

    # Properties
    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days

    @property
    def holds_inventory(self) -> bool:
        """Whether the booking's rooms are still committed in the ledger."""
        return self.booking_status in ACTIVE_BOOKING_STATUSES

    @property
    def is_cancellable(self) -> bool:
        return BookingStatus.CANCELLED in BOOKING_TRANSITIONS[self.booking_status]

    # State machine
    def can_transition_to(self, target: BookingStatus) -> bool:
        return target in BOOKING_TRANSITIONS[self.booking_status]

    def _transition(
        self,
        target: BookingStatus,
        changed_by: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> "BookingStatusHistory":
        if not self.can_transition_to(target):
            raise InvalidTransitionError(self.booking_status, target)
        entry = BookingStatusHistory(
            from_status=self.booking_status,
            to_status=target,
            changed_by=changed_by,
            change_reason=reason,
            changed_at=now_utc(),
        )
        self.booking_status = target
        self.status_history.append(entry)
        return entry

    def record_initial_status(self, changed_by: Optional[str] = None) -> "BookingStatusHistory":
        """Append the history row for a freshly created booking."""
        entry = BookingStatusHistory(
            from_status=None,
            to_status=self.booking_status,
            changed_by=changed_by,
            change_reason="Booking created",
            changed_at=now_utc(),
        )
        self.status_history.append(entry)
        return entry

    def confirm(self, changed_by: Optional[str] = None, reason: Optional[str] = None) -> None:
        self._transition(BookingStatus.CONFIRMED, changed_by, reason)
        self.confirmed_at = now_utc()

    def cancel(self, changed_by: Optional[str] = None, reason: Optional[str] = None) -> None:
        """
        Cancel the booking.

        Raises:
            InvalidTransitionError: if the booking is already cancelled or completed
        """
        self._transition(BookingStatus.CANCELLED, changed_by, reason)
        self.cancelled_at = now_utc()
        self.cancellation_reason = reason

    def complete(self, changed_by: Optional[str] = None, reason: Optional[str] = None) -> None:
        self._transition(BookingStatus.COMPLETED, changed_by, reason)
        self.completed_at = now_utc()

    def apply_payment_outcome(self, outcome: PaymentOutcome, changed_by: Optional[str] = None) -> bool:
        """
        Apply a payment result reported by the payment collaborator.

        ``paid`` marks the payment and confirms a pending booking. ``failed``
        only marks the payment; the guest may retry. Returns False when the
        outcome was already applied.

        Raises:
            InvalidTransitionError: for outcomes the payment status cannot accept
        """
        outcome = PaymentOutcome(outcome)

        if outcome == PaymentOutcome.PAID:
            if self.payment_status == PaymentStatus.PAID:
                return False
            if self.payment_status not in (PaymentStatus.PENDING, PaymentStatus.FAILED):
                raise InvalidTransitionError(
                    self.payment_status, PaymentStatus.PAID, entity="Payment"
                )
            self.payment_status = PaymentStatus.PAID
            if self.booking_status == BookingStatus.PENDING:
                self.confirm(changed_by, "Payment received")
            return True

        if self.payment_status == PaymentStatus.FAILED:
            return False
        if self.payment_status != PaymentStatus.PENDING:
            raise InvalidTransitionError(
                self.payment_status, PaymentStatus.FAILED, entity="Payment"
            )
        self.payment_status = PaymentStatus.FAILED
        return True

    def mark_refunded(self) -> None:
        if self.payment_status != PaymentStatus.PAID:
            raise InvalidTransitionError(
                self.payment_status, PaymentStatus.REFUNDED, entity="Payment"
            )
        self.payment_status = PaymentStatus.REFUNDED

    def __repr__(self) -> str:
        """String representation of booking."""
        return (
            f"<Booking(id={self.id}, reference={self.booking_reference}, "
            f"status={self.booking_status}, hotel_id={self.hotel_id})>"
        )


class BookingStatusHistory(UUIDMixin, TimestampModel):
    """
    Booking status change history for audit trail.

    Append-only: rows are written as part of the transaction that changes
    the booking's status and are never updated.

    Attributes:
        booking_id: Reference to the booking
        from_status: Previous status (NULL for the creation row)
        to_status: New status
        changed_by: Actor who changed the status
        change_reason: Reason for status change
        changed_at: When status was changed
    """

    __tablename__ = "booking_status_history"

    booking_id: Mapped[UUID] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Booking reference",
    )

    from_status: Mapped[Optional[BookingStatus]] = mapped_column(
        Enum(BookingStatus),
        nullable=True,
        comment="Previous status (NULL for initial status)",
    )

    to_status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus),
        nullable=False,
        comment="New status",
    )

    changed_by: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
        comment="Actor who changed the status",
    )

    change_reason: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Reason for status change",
    )

    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        index=True,
        comment="When status was changed",
    )

    booking: Mapped["Booking"] = relationship(
        "Booking",
        back_populates="status_history",
    )

    __table_args__ = (
        Index("ix_status_history_booking_changed", "booking_id", "changed_at"),
        {"comment": "Booking status change audit trail"},
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<BookingStatusHistory(booking_id={self.booking_id}, "
            f"{self.from_status} -> {self.to_status})>"
        )
