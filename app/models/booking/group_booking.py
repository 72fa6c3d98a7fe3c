"""
Group booking request model.

A group request is a long-lead enquiry for many rooms. It is quoted at
the hotel's static rate and never touches the inventory ledger.
"""

from datetime import date as Date
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, FrozenSet, Optional
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    Date as SQLDate,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.exceptions import InvalidTransitionError
from app.models.base.base_model import TimestampModel
from app.models.base.enums import GroupBookingCategory, GroupBookingStatus
from app.models.base.mixins import UUIDMixin

if TYPE_CHECKING:
    from app.models.hotel.hotel import Hotel

__all__ = ["GroupBookingRequest", "GROUP_BOOKING_TRANSITIONS"]


GROUP_BOOKING_TRANSITIONS: Dict[GroupBookingStatus, FrozenSet[GroupBookingStatus]] = {
    GroupBookingStatus.PENDING: frozenset({
        GroupBookingStatus.QUOTED,
        GroupBookingStatus.CONFIRMED,
        GroupBookingStatus.CANCELLED,
    }),
    GroupBookingStatus.QUOTED: frozenset({
        GroupBookingStatus.CONFIRMED,
        GroupBookingStatus.CANCELLED,
    }),
    GroupBookingStatus.CONFIRMED: frozenset({
        GroupBookingStatus.COMPLETED,
        GroupBookingStatus.CANCELLED,
    }),
    GroupBookingStatus.CANCELLED: frozenset(),
    GroupBookingStatus.COMPLETED: frozenset(),
}


class GroupBookingRequest(UUIDMixin, TimestampModel):
    """
    Group booking enquiry raised by an organizer.

    Attributes:
        hotel_id: Hotel requested
        organizer_id: Opaque id of the organizer
        group_name: Name of the group or event
        group_size: Number of people (at least 5)
        category: corporate, wedding, conference, tour or other
        check_in_date / check_out_date: Requested stay
        rooms_required: Rooms needed
        estimated_budget: Optional organizer budget
        special_requirements: Free-form requirements
        status: Request status
        admin_notes: Notes left by the back office
    """

    __tablename__ = "group_booking_requests"

    hotel_id: Mapped[UUID] = mapped_column(
        ForeignKey("hotels.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    organizer_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
    )

    group_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    group_size: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    category: Mapped[GroupBookingCategory] = mapped_column(
        SQLEnum(GroupBookingCategory),
        nullable=False,
    )

    check_in_date: Mapped[Date] = mapped_column(SQLDate, nullable=False)

    check_out_date: Mapped[Date] = mapped_column(SQLDate, nullable=False)

    rooms_required: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    estimated_budget: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(14, 2),
        nullable=True,
    )

    special_requirements: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    status: Mapped[GroupBookingStatus] = mapped_column(
        SQLEnum(GroupBookingStatus),
        nullable=False,
        default=GroupBookingStatus.PENDING,
        index=True,
    )

    admin_notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    hotel: Mapped["Hotel"] = relationship("Hotel", lazy="select")

    __table_args__ = (
        Index("ix_group_request_organizer_created", "organizer_id", "created_at"),
        CheckConstraint("group_size >= 5", name="ck_group_request_min_size"),
        CheckConstraint("rooms_required >= 1", name="ck_group_request_rooms_positive"),
        CheckConstraint(
            "check_in_date < check_out_date",
            name="ck_group_request_dates_ordered",
        ),
        {"comment": "Group booking enquiries"},
    )

    def change_status(self, target: GroupBookingStatus) -> GroupBookingStatus:
        """
        Move the request to ``target`` and return the previous status.

        Raises:
            InvalidTransitionError: if the move is not allowed
        """
        target = GroupBookingStatus(target)
        if target not in GROUP_BOOKING_TRANSITIONS[self.status]:
            raise InvalidTransitionError(self.status, target, entity="Group booking request")
        previous = self.status
        self.status = target
        return previous

    def __repr__(self) -> str:
        return (
            f"<GroupBookingRequest(id={self.id}, group={self.group_name}, "
            f"size={self.group_size}, status={self.status})>"
        )
