"""
Database enums mirroring schema enums.

Provides SQLAlchemy-compatible enum definitions that match
the Pydantic schema enums for consistency.
"""

import enum


class BookingStatus(str, enum.Enum):
    """Booking lifecycle status."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(str, enum.Enum):
    """Payment processing status."""
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentOutcome(str, enum.Enum):
    """Outcome reported by the payment collaborator."""
    PAID = "paid"
    FAILED = "failed"


class ModificationType(str, enum.Enum):
    """Kind of change recorded against a booking."""
    DATE_CHANGE = "date_change"
    GUEST_COUNT = "guest_count"
    ROOM_COUNT = "room_count"
    CANCELLATION = "cancellation"


class ModificationStatus(str, enum.Enum):
    """Approval status of a booking modification."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class GroupBookingCategory(str, enum.Enum):
    """Category of a group booking request."""
    CORPORATE = "corporate"
    WEDDING = "wedding"
    CONFERENCE = "conference"
    TOUR = "tour"
    OTHER = "other"


class GroupBookingStatus(str, enum.Enum):
    """Group booking request status."""
    PENDING = "pending"
    QUOTED = "quoted"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class RefundStatus(str, enum.Enum):
    """Refund request status."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LoyaltyTier(str, enum.Enum):
    """Loyalty program tiers."""
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"
