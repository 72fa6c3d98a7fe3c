"""
Per-hotel, per-date room inventory.

One row per (hotel, date). Rows are created lazily the first time a date
is reserved or administered; a date without a row behaves as the default
day (full capacity, no price override, neutral surge).
"""

from datetime import date as Date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    Date as SQLDate,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.models.base.base_model import TimestampModel
from app.models.base.mixins import UUIDMixin

if TYPE_CHECKING:
    from app.models.hotel.hotel import Hotel

__all__ = ["InventoryDay"]


class InventoryDay(UUIDMixin, TimestampModel):
    """
    Room capacity, commitments and pricing for one hotel on one date.

    Attributes:
        hotel_id: Hotel the row belongs to
        date: Calendar night
        max_rooms: Capacity ceiling
        available_rooms: Rooms not yet committed
        base_price: Optional override of the hotel's static price
        surge_multiplier: Price scaling factor for the night
    """

    __tablename__ = "inventory_days"

    hotel_id: Mapped[UUID] = mapped_column(
        ForeignKey("hotels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Hotel reference",
    )

    date: Mapped[Date] = mapped_column(
        SQLDate,
        nullable=False,
        comment="Night the inventory applies to",
    )

    max_rooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Capacity ceiling",
    )

    available_rooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Rooms not yet committed",
    )

    base_price: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(12, 2),
        nullable=True,
        comment="Per-date price override (NULL falls back to hotel price)",
    )

    surge_multiplier: Mapped[Decimal] = mapped_column(
        Numeric(8, 4),
        nullable=False,
        default=Decimal("1.0"),
        comment="Surge pricing multiplier",
    )

    hotel: Mapped["Hotel"] = relationship(
        "Hotel",
        back_populates="inventory_days",
    )

    __table_args__ = (
        UniqueConstraint("hotel_id", "date", name="uq_inventory_hotel_date"),
        Index("ix_inventory_hotel_date", "hotel_id", "date"),
        CheckConstraint("max_rooms >= 0", name="ck_inventory_max_rooms_positive"),
        CheckConstraint(
            "available_rooms >= 0 AND available_rooms <= max_rooms",
            name="ck_inventory_available_within_capacity",
        ),
        CheckConstraint("surge_multiplier >= 0", name="ck_inventory_surge_positive"),
        CheckConstraint(
            "base_price IS NULL OR base_price >= 0",
            name="ck_inventory_base_price_positive",
        ),
        {"comment": "Per-date room inventory and pricing"},
    )

    @validates("surge_multiplier")
    def validate_surge(self, key: str, value: Decimal) -> Decimal:
        """Validate surge multiplier is non-negative."""
        if value is not None and Decimal(value) < 0:
            raise ValueError("surge_multiplier cannot be negative")
        return value

    @property
    def committed_rooms(self) -> int:
        """Rooms already taken by bookings."""
        return self.max_rooms - self.available_rooms

    def __repr__(self) -> str:
        return (
            f"<InventoryDay(hotel_id={self.hotel_id}, date={self.date}, "
            f"available={self.available_rooms}/{self.max_rooms})>"
        )
