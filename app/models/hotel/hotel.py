"""
Hotel model.

The catalog itself is administered elsewhere; the booking core only reads
the active flag and the static nightly price.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, CheckConstraint, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.models.base.base_model import TimestampModel
from app.models.base.mixins import UUIDMixin

if TYPE_CHECKING:
    from app.models.hotel.inventory import InventoryDay

__all__ = ["Hotel"]


class Hotel(UUIDMixin, TimestampModel):
    """
    Hotel referenced by bookings and inventory.

    Attributes:
        name: Display name
        city: City the hotel is located in
        price_per_night: Static nightly rate used when no per-date price exists
        is_active: Whether the hotel accepts bookings
    """

    __tablename__ = "hotels"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hotel display name",
    )

    city: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        comment="City",
    )

    price_per_night: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        default=Decimal("0.00"),
        comment="Static nightly rate",
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
        comment="Whether the hotel accepts bookings",
    )

    inventory_days: Mapped[List["InventoryDay"]] = relationship(
        "InventoryDay",
        back_populates="hotel",
        lazy="select",
    )

    __table_args__ = (
        Index("ix_hotel_active_city", "is_active", "city"),
        CheckConstraint("price_per_night >= 0", name="ck_hotel_price_positive"),
        {"comment": "Hotels available for booking"},
    )

    @validates("price_per_night")
    def validate_price(self, key: str, value: Decimal) -> Decimal:
        """Validate nightly price is non-negative."""
        if value is not None and Decimal(value) < 0:
            raise ValueError("price_per_night cannot be negative")
        return value

    def __repr__(self) -> str:
        return f"<Hotel(id={self.id}, name={self.name}, active={self.is_active})>"
