"""
Base models package.

Provides the declarative base, mixins and enums for all database models.
"""

from app.models.base.base_model import (
    Base,
    BaseModel,
    TimestampModel,
)

from app.models.base.mixins import (
    UUIDMixin,
    GuestContactMixin,
)

from app.models.base.enums import (
    BookingStatus,
    PaymentStatus,
    PaymentOutcome,
    ModificationType,
    ModificationStatus,
    GroupBookingCategory,
    GroupBookingStatus,
    RefundStatus,
    LoyaltyTier,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "UUIDMixin",
    "GuestContactMixin",
    "BookingStatus",
    "PaymentStatus",
    "PaymentOutcome",
    "ModificationType",
    "ModificationStatus",
    "GroupBookingCategory",
    "GroupBookingStatus",
    "RefundStatus",
    "LoyaltyTier",
]
